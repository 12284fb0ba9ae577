"""Admin dashboard figures.

Each figure is computed on its own. A figure that fails to compute is logged
and reported as zero so the rest of the dashboard still renders.
"""

from dataclasses import dataclass, field
from datetime import datetime

import structlog
from protean.utils.globals import current_domain

from storefront.identity.user import User
from storefront.ordering.order import Order, OrderStatus
from storefront.shared.clock import as_utc, utc_now
from storefront.shared.paging import fetch_all

logger = structlog.get_logger(__name__)


@dataclass
class DashboardStats:
    year_revenue: float = 0.0
    month_revenue: float = 0.0
    pending_orders: int = 0
    total_users: int = 0
    monthly_revenue: list[float] = field(default_factory=lambda: [0.0] * 12)


def _revenue_orders(year: int) -> list[Order]:
    orders = fetch_all(current_domain.repository_for(Order)._dao.query)
    return [
        o
        for o in orders
        if o.status != OrderStatus.CANCELLED.value and o.order_date is not None and as_utc(o.order_date).year == year
    ]


def year_revenue(now: datetime) -> float:
    return round(sum(o.total_amount for o in _revenue_orders(now.year)), 2)


def month_revenue(now: datetime) -> float:
    orders = [o for o in _revenue_orders(now.year) if as_utc(o.order_date).month == now.month]
    return round(sum(o.total_amount for o in orders), 2)


def pending_orders() -> int:
    repo = current_domain.repository_for(Order)
    return repo._dao.query.filter(status=OrderStatus.PENDING.value).all().total


def total_users() -> int:
    return current_domain.repository_for(User)._dao.query.all().total


def monthly_revenue(now: datetime) -> list[float]:
    slots = [0.0] * 12
    for order in _revenue_orders(now.year):
        slots[as_utc(order.order_date).month - 1] += order.total_amount
    return [round(value, 2) for value in slots]


def _safely(metric: str, compute, fallback):
    try:
        return compute()
    except Exception as exc:
        logger.error("dashboard.aggregation_failed", metric=metric, error=str(exc), exc_info=True)
        return fallback


def dashboard_stats(now: datetime | None = None) -> DashboardStats:
    now = as_utc(now) or utc_now()
    return DashboardStats(
        year_revenue=_safely("year_revenue", lambda: year_revenue(now), 0.0),
        month_revenue=_safely("month_revenue", lambda: month_revenue(now), 0.0),
        pending_orders=_safely("pending_orders", pending_orders, 0),
        total_users=_safely("total_users", total_users, 0),
        monthly_revenue=_safely("monthly_revenue", lambda: monthly_revenue(now), [0.0] * 12),
    )
