"""
Admin Service - dashboard aggregates, computed on every read
"""
from typing import List

from greengrocer.config import settings
from greengrocer.models import UserRole
from greengrocer.repositories import Repository
from greengrocer.schemas.admin import DashboardStats
from greengrocer.schemas.order import OrderResponse
from greengrocer.services.order_service import OrderService


class AdminService:
    """Service layer for the back-office dashboard"""
    
    def __init__(self, repository: Repository):
        self.repository = repository
        self.order_service = OrderService(repository)
    
    def get_stats(self) -> DashboardStats:
        users = self.repository.get_all_users()
        orders = self.repository.get_all_orders()
        products = self.repository.get_all_products()
        
        products_sold = 0.0
        for order in orders:
            products_sold += sum(item.quantity for item in self.repository.get_order_items(order.id))
        
        return DashboardStats(
            customer_count=sum(1 for u in users if u.role == UserRole.CUSTOMER.value),
            order_count=len(orders),
            total_revenue=sum(o.total for o in orders),
            products_sold=products_sold,
            product_count=len(products)
        )
    
    def get_recent_orders(self, limit: int = None) -> List[OrderResponse]:
        """Newest orders first"""
        if limit is None:
            limit = settings.RECENT_ORDERS_LIMIT
        orders = sorted(
            self.repository.get_all_orders(),
            key=lambda o: (o.created_at, o.id),
            reverse=True
        )
        return [self.order_service.build_order_response(o) for o in orders[:limit]]
