from __future__ import annotations

import pytest
from playwright.sync_api import Page

from hrm_ui import constants as ui
from hrm_ui.config import Settings
from hrm_ui.engine import PlaywrightEngine
from hrm_ui.errors import StaleElement
from hrm_ui.visibility import is_visible

pytestmark = pytest.mark.e2e

MARKUP = """
<div class="oxd-table-filter-area" style="display: none;">
  <input name="username" value="Admin">
  <input type="checkbox" id="include" checked>
</div>
<div class="oxd-table-body">
  <div class="oxd-table-row">
    <div class="oxd-table-cell"></div><div class="oxd-table-cell">Admin</div>
  </div>
</div>
<span class="gone">temporary</span>
"""


@pytest.fixture()
def local_engine(page: Page, settings: Settings) -> PlaywrightEngine:
    page.set_content(MARKUP)
    return PlaywrightEngine(page, settings)


def test_t08_reads_match_the_dom(local_engine: PlaywrightEngine) -> None:
    (panel,) = local_engine.locate(ui.FILTER_PANEL)
    assert not is_visible(local_engine.read_style(panel))

    (username,) = local_engine.locate('input[name="username"]')
    assert local_engine.input_value(username) == "Admin"
    local_engine.page.evaluate("document.querySelector('.oxd-table-filter-area').style.display = ''")
    local_engine.clear(username)
    local_engine.fill(username, "jdoe")
    assert local_engine.input_value(username) == "jdoe"

    (checkbox,) = local_engine.locate("#include")
    assert local_engine.is_checked(checkbox)

    (row,) = local_engine.locate(ui.TABLE_ROW)
    cells = local_engine.locate(ui.TABLE_CELL, within=row)
    assert [local_engine.read_text(c) for c in cells] == ["", "Admin"]


def test_t08_wait_for_condition_sees_late_elements(local_engine: PlaywrightEngine) -> None:
    local_engine.page.evaluate(
        "setTimeout(() => document.body.insertAdjacentHTML('beforeend',"
        " '<div class=\"late\">late</div>'), 300)"
    )
    assert local_engine.wait_for_condition(lambda: bool(local_engine.locate(".late")), 3000)
    assert not local_engine.wait_for_condition(lambda: bool(local_engine.locate(".never")), 300)


def test_t08_detached_element_reads_as_stale(local_engine: PlaywrightEngine) -> None:
    (gone,) = local_engine.locate(".gone")
    local_engine.page.evaluate("document.querySelector('.gone').remove()")
    with pytest.raises(StaleElement):
        local_engine.read_text(gone)
    assert not local_engine.wait_for_condition(lambda: local_engine.read_text(gone) == "x", 300)
