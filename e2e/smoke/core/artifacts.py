from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError, Page

logger = logging.getLogger(__name__)


def safe_name(s: str) -> str:
    s = re.sub(r"[^a-zA-Z0-9_.-]+", "_", s or "")
    s = s.strip("_")
    return s[:120] if s else "scenario"


@dataclass
class Artifacts:
    base_dir: Path
    scenario_id: str

    @property
    def out_dir(self) -> Path:
        d = self.base_dir / safe_name(self.scenario_id)
        d.mkdir(parents=True, exist_ok=True)
        return d

    def path(self, filename: str) -> Path:
        return self.out_dir / filename

    def save_debug(self, page: Page, prefix: str) -> None:
        # best effort: the page may already be closed or mid-navigation
        try:
            page.screenshot(path=str(self.path(f"{prefix}.png")), full_page=True)
        except PlaywrightError as e:
            logger.debug("screenshot failed for %s: %s", self.scenario_id, e)
        try:
            self.path(f"{prefix}.html").write_text(page.content(), encoding="utf-8")
        except (PlaywrightError, OSError) as e:
            logger.debug("html dump failed for %s: %s", self.scenario_id, e)
