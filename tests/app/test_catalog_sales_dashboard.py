from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest
import responses

from vendas_app.services.catalog_service import (
    CatalogService,
    product_payload,
    search_clients,
    search_negotiations,
    search_products,
)
from vendas_app.services.dashboard_service import DashboardService
from vendas_app.services.sales_service import SalesService, export_sales_csv, search_sales
from vendas_client_sdk.clients.entities import EntityClient
from vendas_client_sdk.exceptions import InvalidResponseError, ServerError, ValidationError
from vendas_client_sdk.models import Client, NegotiationType, Product, Sale, SaleCreate


def _sale(number: str, created: datetime, total: str, client: str = "Loja A", seller: str = "Carla Dias") -> Sale:
    return Sale(
        id=f"s-{number}",
        number=number,
        seller_id="u-vend",
        seller_name=seller,
        client_id="c-1",
        client_name=client,
        negotiation_type_id="n-1",
        negotiation_type_name="À vista",
        total=Decimal(total),
        items=[
            {"product_id": "p-1", "product_name": "Caneta", "quantity": 1, "unit_price": total, "subtotal": total},
        ],
        created_date=created,
    )


def test_catalog_searches() -> None:
    products = [
        Product(id="1", code="CAN01", name="Caneta Azul", price=Decimal("2")),
        Product(id="2", code="LAP01", name="Lápis", price=Decimal("1")),
    ]
    assert search_products(products, "can") == [products[0]]
    assert search_products(products, "lap01") == [products[1]]
    clients = [Client(id="c1", name="Loja A", document="123", email="a@loja.com"), Client(id="c2", name="Mercado B")]
    assert search_clients(clients, "LOJA.COM") == [clients[0]]
    assert search_clients(clients, "123") == [clients[0]]
    negotiations = [NegotiationType(id="n1", code="PRAZO30", description="30 dias")]
    assert search_negotiations(negotiations, "prazo") == negotiations


def test_product_payload_validation() -> None:
    payload = product_payload({"code": " P1 ", "name": "Caneta", "price": "2.5", "stock": "3", "unit": "kg"})
    assert payload == {
        "code": "P1",
        "name": "Caneta",
        "description": None,
        "price": Decimal("2.5"),
        "stock": 3,
        "unit": "KG",
        "active": True,
    }
    with pytest.raises(ValidationError):
        product_payload({"code": "P1", "name": "X", "price": "-1"})
    with pytest.raises(ValidationError):
        product_payload({"code": "P1", "name": "X", "unit": "TON"})
    with pytest.raises(ValidationError):
        product_payload({"name": "X"})


@pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity", "abc"])
def test_product_payload_rejects_non_numeric_prices(price: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        product_payload({"code": "P1", "name": "X", "price": price})
    assert excinfo.value.field == "price"


def test_catalog_save_and_active_filter(fake_session) -> None:
    service = CatalogService(fake_session)
    created = service.products.save({"code": "P1", "name": "Caneta", "price": "2.00", "stock": 4})
    service.products.save({"code": "P2", "name": "Velha", "active": False})
    service.products.save({"code": "P1", "name": "Caneta Azul", "price": "2.00", "stock": 4}, record_id=created.id)
    active = service.active_products()
    assert [product.name for product in active] == ["Caneta Azul"]
    assert fake_session.products().calls[-1][1] == {"active": True}
    service.products.delete(created.id)
    assert [product.code for product in service.products.list()] == ["P2"]


def test_create_sale_propagates_store_errors(fake_session) -> None:
    fake_session.sales().fail_create = ServerError(
        code="HTTP_ERROR", message="down", details=None, trace_id="t-1", status_code=503
    )
    sale = SaleCreate(
        number="VEN-20261019-00001",
        seller_id="u-1",
        client_id="c-1",
        client_name="Loja A",
        negotiation_type_id="n-1",
        negotiation_type_name="À vista",
        total=Decimal("1"),
    )
    with pytest.raises(ServerError):
        SalesService(fake_session).create_sale(sale)
    assert fake_session.sales().rows == []


@responses.activate
def test_create_sale_rejects_malformed_store_record(fake_session, http) -> None:
    fake_session.tables["Sale"] = EntityClient(http=http, access_token="token-1", entity="Sale", model=Sale)
    responses.add(
        responses.POST,
        "https://store.example.com/api/apps/app-1/entities/Sale",
        json={"id": "s-1", "number": "VEN-20261019-00001"},
        status=201,
    )
    sale = SaleCreate(
        number="VEN-20261019-00001",
        seller_id="u-1",
        client_id="c-1",
        client_name="Loja A",
        negotiation_type_id="n-1",
        negotiation_type_name="À vista",
        total=Decimal("1"),
    )
    with pytest.raises(InvalidResponseError) as excinfo:
        SalesService(fake_session).create_sale(sale)
    assert excinfo.value.code == "INVALID_RESPONSE"
    assert excinfo.value.details["number"] == "VEN-20261019-00001"


def test_search_and_export_sales(tmp_path) -> None:
    sales = [
        _sale("VEN-20261019-00001", datetime(2026, 10, 19, 14, 5), "30.00"),
        _sale("VEN-20261018-00002", datetime(2026, 10, 18, 9, 0), "12.50", client="Mercado B", seller="Bruno"),
    ]
    assert search_sales(sales, "mercado") == [sales[1]]
    assert search_sales(sales, "00001") == [sales[0]]
    assert search_sales(sales, "bruno") == [sales[1]]

    path = export_sales_csv(sales, tmp_path, now=datetime(2026, 10, 19, 18, 0))
    assert path.name == "vendas_20261019.csv"
    lines = path.read_text(encoding="utf-8-sig").splitlines()
    assert lines[0] == "Número,Data,Cliente,Vendedor,Tipo,Itens,Total"
    assert lines[1] == "VEN-20261019-00001,19/10/2026 14:05,Loja A,Carla Dias,À vista,1,30.00"


def test_dashboard_stats(fake_session, seller, admin) -> None:
    fake_session.sales().rows.extend(
        [
            _sale("VEN-1", datetime(2026, 10, 19, 10, 0), "30.00"),
            _sale("VEN-2", datetime(2026, 10, 19, 11, 0), "20.00"),
            _sale("VEN-3", datetime(2026, 10, 17, 11, 0), "5.00"),
        ]
    )
    fake_session.products().rows.extend(
        [Product(id="1", code="A", name="A"), Product(id="2", code="B", name="B", active=False)]
    )
    fake_session.clients().rows.append(Client(id="c1", name="Loja A"))
    fake_session.users().rows.extend([seller, admin])

    stats = DashboardService(fake_session).load(seller, today=date(2026, 10, 19))
    assert (stats.sales_today, stats.revenue_today) == (2, Decimal("50.00"))
    assert stats.recent_revenue == Decimal("55.00")
    assert (stats.active_products, stats.total_products) == (1, 2)
    assert (stats.active_clients, stats.total_clients) == (1, 1)
    assert stats.sellers is None
    assert fake_session.sales().calls[0] == ("list", "-created_date", 10)

    assert DashboardService(fake_session).load(admin, today=date(2026, 10, 19)).sellers == 2


def test_sales_service_lists_newest_first_and_exports(fake_session, tmp_path) -> None:
    fake_session.sales().rows.append(_sale("VEN-20261019-00001", datetime(2026, 10, 19, 14, 5), "30.00"))
    service = SalesService(fake_session)
    sales = service.list_sales(limit=50)
    assert fake_session.sales().calls[-1] == ("list", "-created_date", 50)
    path = service.export_csv(sales, tmp_path / "out")
    assert path.parent == tmp_path / "out"
    assert path.name.startswith("vendas_") and path.suffix == ".csv"
