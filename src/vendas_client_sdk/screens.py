from __future__ import annotations

from dataclasses import dataclass

from .models import Role

ALL_ROLES: tuple[str, ...] = (Role.SUP.value, Role.ADMIN.value, Role.VENDEDOR.value)
MANAGER_ROLES: tuple[str, ...] = (Role.SUP.value, Role.ADMIN.value)


@dataclass(frozen=True)
class ScreenSpec:
    name: str
    title: str
    roles: tuple[str, ...]
    grantable: bool = True


SCREENS: tuple[ScreenSpec, ...] = (
    ScreenSpec("Dashboard", "Dashboard", ALL_ROLES),
    ScreenSpec("Vendedores", "Vendedores", MANAGER_ROLES),
    ScreenSpec("Produtos", "Produtos", ALL_ROLES),
    ScreenSpec("Clientes", "Clientes", ALL_ROLES),
    ScreenSpec("Negociacoes", "Tipos de Negociação", MANAGER_ROLES),
    ScreenSpec("NovaVenda", "Nova Venda", ALL_ROLES),
    ScreenSpec("Vendas", "Consultar Vendas", ALL_ROLES),
    ScreenSpec("Acessos", "Acessos", MANAGER_ROLES, grantable=False),
)

SCREENS_BY_NAME: dict[str, ScreenSpec] = {screen.name: screen for screen in SCREENS}

# Screens offered for per-user grants on the access administration screen.
GRANTABLE_SCREENS: tuple[ScreenSpec, ...] = tuple(screen for screen in SCREENS if screen.grantable)

