"""
Admin dashboard endpoints
"""
from typing import List

from fastapi import APIRouter, Depends

from greengrocer.api.deps import get_repository, require_admin
from greengrocer.repositories import Repository
from greengrocer.schemas.admin import DashboardStats
from greengrocer.schemas.order import OrderResponse
from greengrocer.services.admin_service import AdminService

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def get_admin_service(repository: Repository = Depends(get_repository)) -> AdminService:
    """Dependency to get AdminService instance"""
    return AdminService(repository)


@router.get("/stats", response_model=DashboardStats, summary="Dashboard statistics")
def get_stats(service: AdminService = Depends(get_admin_service)):
    """
    Aggregates computed on every request:
    customers, orders, revenue, units sold and products
    """
    return service.get_stats()


@router.get("/orders/recent", response_model=List[OrderResponse], summary="Recent orders")
def get_recent_orders(service: AdminService = Depends(get_admin_service)):
    return service.get_recent_orders()
