from __future__ import annotations

import pytest

from vendas_client_sdk.access_control import (
    can_delete_seller,
    can_edit_seller,
    can_manage_sellers,
    can_view_screen,
    needs_profile_setup,
    require,
    visible_screens,
)
from vendas_client_sdk.exceptions import PermissionDenied
from vendas_client_sdk.models import UserRecord


def _user(role: str | None, email: str | None = None, **extra) -> UserRecord:
    return UserRecord(id=f"u-{role}-{email}", role=role, email=email, **extra)


SUP = _user("SUP", "sup@example.com")
ADMIN = _user("ADMIN", "admin@example.com")
VENDEDOR = _user("VENDEDOR", "vend@example.com")


def test_admin_cannot_edit_or_delete_sup() -> None:
    assert can_edit_seller(ADMIN, SUP) is False
    assert can_delete_seller(ADMIN, SUP) is False


def test_sup_can_edit_self_but_never_delete_self() -> None:
    assert can_edit_seller(SUP, SUP) is True
    assert can_delete_seller(SUP, SUP) is False


def test_sup_edit_requires_matching_email() -> None:
    other_sup = _user("SUP", "other@example.com")
    assert can_edit_seller(other_sup, SUP) is False
    assert can_edit_seller(_user("SUP", None), _user("SUP", None)) is False


@pytest.mark.parametrize(
    ("actor", "expected"),
    [(SUP, True), (ADMIN, True), (VENDEDOR, False), (None, False)],
)
def test_managers_edit_and_delete_regular_sellers(actor, expected) -> None:
    subject = _user("VENDEDOR", "x@example.com")
    assert can_edit_seller(actor, subject) is expected
    assert can_delete_seller(actor, subject) is expected
    assert can_manage_sellers(actor) is expected


def test_vendedor_navigation() -> None:
    names = [screen.name for screen in visible_screens(VENDEDOR)]
    assert names == ["Dashboard", "Produtos", "Clientes", "NovaVenda", "Vendas"]
    assert not can_view_screen(VENDEDOR, "Vendedores")
    assert not can_view_screen(VENDEDOR, "Acessos")


def test_manager_navigation_includes_admin_screens() -> None:
    names = {screen.name for screen in visible_screens(ADMIN)}
    assert {"Vendedores", "Negociacoes", "Acessos"} <= names
    assert len(visible_screens(SUP)) == 8


def test_no_actor_or_unknown_screen_sees_nothing() -> None:
    assert visible_screens(None) == []
    assert not can_view_screen(SUP, "Relatorios")


def test_needs_profile_setup() -> None:
    assert needs_profile_setup(None)
    assert needs_profile_setup(_user(None))
    assert needs_profile_setup(_user("user"))
    assert not needs_profile_setup(_user("user", phone="1199"))
    assert not needs_profile_setup(VENDEDOR)


def test_require_raises_permission_denied() -> None:
    require(True, "delete_seller", "ok")
    with pytest.raises(PermissionDenied) as exc_info:
        require(False, "delete_seller", "not allowed")
    assert exc_info.value.action == "delete_seller"
