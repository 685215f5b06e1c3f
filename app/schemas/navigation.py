"""Navigation and dashboard response schemas."""

from __future__ import annotations

from typing import Any

from app.domain.navigation import NavigationItem
from app.schemas.common import CamelModel


class NavigationNode(CamelModel):
    title: str
    href: str
    icon: str | None = None
    children: list[NavigationNode] = []

    @classmethod
    def from_item(cls, item: NavigationItem) -> NavigationNode:
        return cls(
            title=item.title,
            href=item.href,
            icon=item.icon,
            children=[cls.from_item(child) for child in item.children],
        )


class DashboardResponse(CamelModel):
    dashboard: str
    role: str
    navigation: list[NavigationNode]
    sections: dict[str, Any]


NavigationNode.model_rebuild()
