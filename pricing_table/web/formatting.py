from decimal import Decimal, ROUND_HALF_UP


def format_number(value, decimals=0, decimal_sep=",", thousand_sep=".") -> str:
    # 12345.678 (2) -> 12.345,68
    d = Decimal(str(value)).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    sign = "-" if d < 0 else ""
    s = f"{abs(d):.{decimals}f}"
    whole, _, frac = s.partition(".")
    # thousand grouping
    parts = []
    while whole:
        parts.append(whole[-3:])
        whole = whole[:-3]
    whole = thousand_sep.join(reversed(parts))
    return f"{sign}{whole}{decimal_sep}{frac}" if frac else f"{sign}{whole}"


def format_money(value, currency_symbol="€", decimals=2, decimal_sep=",", thousand_sep=".") -> str:
    return f"{currency_symbol} {format_number(value, decimals, decimal_sep, thousand_sep)}"


def format_plain(value) -> str:
    # Decimal("20.00") -> "20", Decimal("12.50") -> "12.5"
    d = Decimal(str(value))
    if d == d.to_integral_value():
        return str(d.quantize(Decimal("1")))
    return format(d.normalize(), "f")
