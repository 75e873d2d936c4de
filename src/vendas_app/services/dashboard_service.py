from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Sequence

from vendas_client_sdk import ApiSession
from vendas_client_sdk.access_control import can_manage_sellers, needs_profile_setup
from vendas_client_sdk.clients.entities import NEWEST_FIRST
from vendas_client_sdk.models import Sale, UserRecord

logger = logging.getLogger(__name__)

RECENT_WINDOW = 10
RECENT_SHOWN = 5


@dataclass(frozen=True)
class DashboardStats:
    sales_today: int
    revenue_today: Decimal
    recent_sales_count: int
    recent_revenue: Decimal
    active_products: int
    total_products: int
    active_clients: int
    total_clients: int
    sellers: int | None
    needs_setup: bool
    recent_sales: list[Sale] = field(default_factory=list)


def summarize_sales(sales: Sequence[Sale], today: date) -> tuple[int, Decimal, Decimal]:
    todays = [sale for sale in sales if sale.created_date and sale.created_date.date() == today]
    revenue_today = sum((sale.total for sale in todays), Decimal("0.00"))
    revenue = sum((sale.total for sale in sales), Decimal("0.00"))
    return len(todays), revenue_today, revenue


class DashboardService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load(self, actor: UserRecord | None, today: date | None = None) -> DashboardStats:
        sales = self.session.sales().list(sort=NEWEST_FIRST, limit=RECENT_WINDOW)
        products = self.session.products().list()
        clients = self.session.clients().list()
        sellers = len(self.session.users().list()) if can_manage_sellers(actor) else None
        sales_today, revenue_today, revenue = summarize_sales(sales, today or date.today())
        logger.info("dashboard_loaded", extra={"sales": len(sales), "sellers_visible": sellers is not None})
        return DashboardStats(
            sales_today=sales_today,
            revenue_today=revenue_today,
            recent_sales_count=len(sales),
            recent_revenue=revenue,
            active_products=sum(1 for product in products if product.active),
            total_products=len(products),
            active_clients=sum(1 for client in clients if client.active),
            total_clients=len(clients),
            sellers=sellers,
            needs_setup=needs_profile_setup(actor),
            recent_sales=list(sales[:RECENT_SHOWN]),
        )
