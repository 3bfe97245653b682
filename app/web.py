from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from datastore.reading_store import ReadingStore, build_default_store
from services.classifier import DashboardSnapshot, ReadingClassifier, Status, build_default_classifier
from services.errors import EmptyInputError
from services.trends import CHARTS, build_series


APP_NAME = "OceanTides"
APP_VERSION = "1.0.0"

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

STATUS_CLASSES = {
    Status.low: "status-low",
    Status.normal: "status-normal",
    Status.high: "status-high",
}

NAV_ITEMS = (
    ("Overview", True),
    ("Buoy Network", False),
    ("Map View", False),
    ("Analytics", False),
    ("Alerts", False),
    ("Team", False),
)


class Theme(str, Enum):
    light = "light"
    dark = "dark"


@dataclass(frozen=True)
class ViewConfig:
    """Presentation options owned by the caller and passed into each render."""

    theme: Theme = Theme.light
    sidebar_collapsed: bool = False

    @classmethod
    def from_query(cls, theme: Optional[str], sidebar: Optional[str]) -> "ViewConfig":
        try:
            resolved_theme = Theme((theme or Theme.light.value).lower())
        except ValueError:
            resolved_theme = Theme.light
        return cls(
            theme=resolved_theme,
            sidebar_collapsed=(sidebar or "").lower() == "collapsed",
        )

    @property
    def sidebar(self) -> str:
        return "collapsed" if self.sidebar_collapsed else "expanded"

    def toggled_theme(self) -> "ViewConfig":
        other = Theme.light if self.theme is Theme.dark else Theme.dark
        return ViewConfig(theme=other, sidebar_collapsed=self.sidebar_collapsed)

    def toggled_sidebar(self) -> "ViewConfig":
        return ViewConfig(theme=self.theme, sidebar_collapsed=not self.sidebar_collapsed)

    def query(self) -> str:
        return f"theme={self.theme.value}&sidebar={self.sidebar}"


def get_classifier() -> ReadingClassifier:
    return build_default_classifier()


def get_store() -> ReadingStore:
    return build_default_store()


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_dashboard", response_class=HTMLResponse)
async def ui_dashboard(
    request: Request,
    theme: Optional[str] = Query(None),
    sidebar: Optional[str] = Query(None),
    store: ReadingStore = Depends(get_store),
    classifier: ReadingClassifier = Depends(get_classifier),
) -> HTMLResponse:
    view = ViewConfig.from_query(theme, sidebar)
    readings = store.scan()

    snapshot: Optional[DashboardSnapshot]
    try:
        snapshot = classifier.snapshot(readings)
    except EmptyInputError:
        snapshot = None

    return templates.TemplateResponse(
        request,
        "ui/dashboard.html",
        {
            "app_name": APP_NAME,
            "app_version": APP_VERSION,
            "view": view,
            "nav_items": NAV_ITEMS,
            "snapshot": snapshot,
            "status_classes": STATUS_CLASSES,
            "charts": [build_series(key, readings) for key in CHARTS],
        },
    )
