"""
Profile update flow against a routed fake settings screen.
"""

import pytest

from anyteam_e2e.core.flow import FlowStatus
from anyteam_e2e.core.session import SessionBridge
from anyteam_e2e.exceptions import ElementNotFound, FlowStepFailed
from anyteam_e2e.flows.profile import update_profile

from conftest import html, make_settings

HOME_URL = "https://app.anyteam.com/home"

pytestmark = pytest.mark.browser

LINKEDIN_TAB = """
<button role="tab" id="radix-trigger-linkedin" data-state="inactive"
        onclick="selectTab('linkedin')">LinkedIn</button>"""

LINKEDIN_PANE = """
<div id="radix-content-linkedin" hidden>
  <button onclick="document.querySelector('input[name=linkedIn]').hidden = false">
    <svg class="lucide-pencil" width="16" height="16"></svg></button>
  <input name="linkedIn" hidden>
</div>"""

SETTINGS_TEMPLATE = """
<nav>
  <button data-sidebar="menu-button"
          onclick="document.getElementById('settings').hidden = false"><h5>Settings</h5></button>
</nav>
<div id="settings" hidden>
  <div role="tablist">
    <button role="tab" id="radix-trigger-profile_info" data-state="inactive"
            onclick="selectTab('profile_info')">Profile Info</button>
    %(tab)s
  </div>
  %(pane)s
  <div id="radix-content-profile_info" hidden>
    <p>About yourself</p>
    <textarea name="about" hidden></textarea>
    <button onclick="document.querySelector('textarea[name=about]').hidden = false">
      <svg class="lucide-pencil" width="16" height="16"></svg></button>
  </div>
  <button class="text-sm flex items-center underline underline-offset-2" onclick="save()">Save</button>
</div>
<script>
window.saves = [];
function selectTab(name) {
  document.querySelectorAll("[role=tab]").forEach((tab) => {
    tab.dataset.state = tab.id.endsWith(name) ? "active" : "inactive";
  });
  document.querySelectorAll("[id^=radix-content-]").forEach((pane) => {
    pane.hidden = !pane.id.endsWith(name);
  });
}
function save() {
  const linkedin = document.querySelector("input[name=linkedIn]");
  window.saves.push({
    about: document.querySelector("textarea[name=about]").value,
    linkedin: linkedin ? linkedin.value : null,
  });
}
</script>
"""


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path, candidate=300, overall=800)


async def open_home(sites, open_page, with_linkedin):
    fields = {"tab": LINKEDIN_TAB, "pane": LINKEDIN_PANE} if with_linkedin else \
        {"tab": "", "pane": ""}
    sites.add(HOME_URL, html(SETTINGS_TEMPLATE % fields, title="Anyteam"))
    return await open_page(HOME_URL)


@pytest.mark.asyncio
async def test_updates_about_and_linkedin(sites, open_page, settings):
    page = await open_home(sites, open_page, with_linkedin=True)

    result = await update_profile(SessionBridge(page), about="QA lead",
                                  linkedin="https://linkedin.com/in/qa",
                                  settings=settings)

    assert result.status is FlowStatus.COMPLETED
    assert result.degraded == []
    assert result.state["profile_tab_active"] is True
    assert result.state["linkedin_saved"] is True
    saves = await page.evaluate("window.saves")
    assert saves[0]["about"] == "QA lead"
    assert saves[-1] == {"about": "QA lead", "linkedin": "https://linkedin.com/in/qa"}


@pytest.mark.asyncio
async def test_missing_linkedin_tab_degrades(sites, open_page, settings):
    page = await open_home(sites, open_page, with_linkedin=False)

    result = await update_profile(SessionBridge(page), about="QA lead",
                                  linkedin="https://linkedin.com/in/qa",
                                  settings=settings)

    assert result.status is FlowStatus.COMPLETED
    assert result.degraded == ["open_linkedin_tab", "edit_linkedin"]
    assert result.skipped == ["save_linkedin"]
    assert result.state.is_absent("linkedin_edited")
    assert await page.evaluate("window.saves") == [{"about": "QA lead", "linkedin": None}]


@pytest.mark.asyncio
async def test_profile_tab_that_never_activates_fails(sites, open_page, settings):
    stuck = SETTINGS_TEMPLATE.replace(
        'tab.dataset.state = tab.id.endsWith(name) ? "active" : "inactive";', "")
    sites.add(HOME_URL, html(stuck % {"tab": "", "pane": ""}, title="Anyteam"))
    page = await open_page(HOME_URL)

    with pytest.raises(FlowStepFailed) as exc_info:
        await update_profile(SessionBridge(page), about="QA lead", settings=settings)

    assert exc_info.value.step_name == "verify_profile_info_tab"
    assert isinstance(exc_info.value.cause, ElementNotFound)
    assert await page.evaluate("window.saves") == []
