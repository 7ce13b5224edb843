from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class CustomerOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[str] = None


class CustomerOrderOut(BaseModel):
    id: str
    name: Optional[str] = None
    total_price: Optional[float] = None
    opt_in: Optional[bool] = None
    payment_status: Optional[str] = None
    created_at: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    user_id: Optional[int] = None
    store_name: str = "N/A"


class OrderSummaryOut(BaseModel):
    total_orders: int
    total_spent: float
    average_order_value: float
    opt_in_count: int
    opt_out_count: int
    opt_in_rate: float


class OrderSearchOut(BaseModel):
    success: bool = True
    customer: Optional[CustomerOut] = None
    orders: List[CustomerOrderOut] = []
    summary: Optional[OrderSummaryOut] = None
    message: Optional[str] = None

    def to_payload(self) -> dict:
        payload = self.model_dump(mode="json")
        if payload.get("message") is None:
            payload.pop("message", None)
        return payload


class ErrorOut(BaseModel):
    success: bool = False
    error: str


class StoreOut(BaseModel):
    id: str
    name: str
    domain: str
    currency: str
    order_count: int


class StoreListOut(BaseModel):
    success: bool = True
    total_stores: int = 0
    stores: List[StoreOut]


class DateRangeOut(BaseModel):
    date_from: str
    date_to: str


class MetricCardOut(BaseModel):
    title: str
    value: float
    previous_value: float
    change: Optional[float] = None
    is_positive: Optional[bool] = None


class OrderKpisOut(BaseModel):
    success: bool = True
    store_id: Optional[str] = None
    current: DateRangeOut
    previous: DateRangeOut
    metrics: List[MetricCardOut]
