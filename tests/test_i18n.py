from pricing_table.i18n import ntranslate, pick_language, translate


def test_translate_and_fallback():
    assert translate("header.cartons", "it") == "Cartoni"
    assert translate("header.cartons", "de") == "Cartons"
    assert translate("header.cartons") == "Cartons"
    assert translate("missing.key", "it") == "missing.key"
    assert translate("qty.cartons_range", "en", start=2, end=9) == "From 2 to 9"


def test_ntranslate_plural():
    assert ntranslate("qty.cartons", 1, "en", n=1) == "1 carton"
    assert ntranslate("qty.cartons", 0, "en", n=0) == "0 cartons"
    assert ntranslate("qty.units", 3, "it_IT", n=3) == "3 pezzi"


def test_pick_language():
    assert pick_language(user_pref="it") == "it"
    assert pick_language(user_pref="fr", accept_language="it-IT,en;q=0.5") == "it"
    assert pick_language(accept_language="fr-FR,en;q=0.3,it;q=0.8") == "it"
    assert pick_language(accept_language="fr-FR") == "en"
    assert pick_language(fallback="it") == "it"
    assert pick_language(fallback="xx") == "en"
