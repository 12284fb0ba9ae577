"""FastAPI endpoint for the admin dashboard."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from storefront.api.security import Principal, require_admin
from storefront.dashboard.aggregation import dashboard_stats

router = APIRouter(prefix="/api/admin/dashboard", tags=["admin-dashboard"])


class DashboardResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "year_revenue": 12450.5,
                    "month_revenue": 1320.0,
                    "pending_orders": 4,
                    "total_users": 87,
                    "monthly_revenue": [900.0, 1100.5, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
                }
            ]
        }
    }

    year_revenue: float
    month_revenue: float
    pending_orders: int
    total_users: int
    monthly_revenue: list[float]


@router.get("", response_model=DashboardResponse)
async def dashboard(principal: Principal = Depends(require_admin)) -> DashboardResponse:
    stats = dashboard_stats()
    return DashboardResponse(
        year_revenue=stats.year_revenue,
        month_revenue=stats.month_revenue,
        pending_orders=stats.pending_orders,
        total_users=stats.total_users,
        monthly_revenue=stats.monthly_revenue,
    )
