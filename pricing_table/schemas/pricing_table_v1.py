# pricing_table/schemas/pricing_table_v1.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pricing_table.engine.table_builder import PricingTableV1


class TierRowOutV1(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_qty: int = Field(alias="from")
    to_qty: Optional[int] = Field(default=None, alias="to")
    type: str
    amount: str
    cartons_label: str
    units_label: str
    discount: str
    unit_price: str
    unit_price_display: str


class TableHeadersOutV1(BaseModel):
    cartons: str
    discount: str
    unit_price: str


class PricingTableOutV1(BaseModel):
    """
    JSON shape of a rendered pricing table (same data as the HTML fragment).
    """

    model_config = ConfigDict(extra="forbid")

    version: str = "v1"
    product_id: int
    rule_set_key: str
    pieces_per_carton: int
    max_order_quantity: int
    headers: TableHeadersOutV1
    rows: List[TierRowOutV1]

    @staticmethod
    def from_table(table: PricingTableV1) -> "PricingTableOutV1":
        return PricingTableOutV1(
            product_id=table.product_id,
            rule_set_key=table.rule_set_key,
            pieces_per_carton=table.pieces_per_carton,
            max_order_quantity=table.max_order_quantity,
            headers=TableHeadersOutV1(
                cartons=table.headers.cartons,
                discount=table.headers.discount,
                unit_price=table.headers.unit_price,
            ),
            rows=[
                TierRowOutV1(
                    from_qty=r.from_qty,
                    to_qty=r.to_qty,
                    type=r.type,
                    amount=r.amount,
                    cartons_label=r.cartons_label,
                    units_label=r.units_label,
                    discount=r.discount,
                    unit_price=str(r.unit_price),
                    unit_price_display=r.unit_price_display,
                )
                for r in table.rows
            ],
        )
