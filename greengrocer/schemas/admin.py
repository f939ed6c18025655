"""
Pydantic schemas for the admin dashboard
"""
from greengrocer.schemas.common import CamelModel


class DashboardStats(CamelModel):
    """Aggregates computed on read"""
    customer_count: int
    order_count: int
    total_revenue: float
    products_sold: float
    product_count: int
