"""
Google Calendar actions against a routed fake calendar page.
"""

from datetime import date

import pytest

from anyteam_e2e.actions.google_calendar_actions import SEND_OR_SAVE, GoogleCalendarActions
from anyteam_e2e.core.session import SessionBridge
from anyteam_e2e.exceptions import ElementNotFound
from anyteam_e2e.flows.scheduling import schedule_meeting
from anyteam_e2e.pages.google_calendar_page import GoogleCalendarPage
from anyteam_e2e.scenario_data import MeetingDetails

from conftest import html, make_settings

CALENDAR_URL = "https://calendar.google.com/calendar/u/0/r"
EVENT_EDIT_URL = "https://calendar.google.com/calendar/u/0/r/eventedit"

pytestmark = pytest.mark.browser

CALENDAR_HTML = html("""
<div id="grid"></div>
<button jsname="todz4c" onclick="document.getElementById('menu').hidden = false">Create</button>
<div id="menu" hidden>
  <div role="menuitem" onclick="openEditor()">Event</div>
  <div role="menuitem">Task</div>
</div>
<div id="editor" hidden>
  <input aria-label="Add title">
  <span data-key="startDate" tabindex="0">Monday, October 19</span>
  <input aria-label="Start time">
  <input aria-label="End time">
  <button onclick="save()">Save</button>
</div>
<script>
window.saved = null;
window.dateTyped = "";
document.querySelector("[data-key=startDate]").addEventListener("keydown", (e) => {
  if (e.key.length === 1) window.dateTyped += e.key;
});
function openEditor() {
  document.getElementById("menu").hidden = true;
  document.getElementById("editor").hidden = false;
}
function value(label) {
  return document.querySelector(`input[aria-label="${label}"]`).value;
}
function save() {
  window.saved = {title: value("Add title"), start: value("Start time"), end: value("End time")};
  document.getElementById("editor").hidden = true;
  const event = document.createElement("div");
  event.textContent = window.saved.title;
  document.getElementById("grid").appendChild(event);
}
</script>
""", title="Google Calendar")

SECOND_SEND_ONLY_HTML = html("""
<button style="display:none">Send</button>
<div role="button" onclick="sendClicked()"><span jsname="V67aGc">Send</span></div>
<script>
window.sent = false;
window.invited = false;
function sendClicked() {
  window.sent = true;
  const dialog = document.createElement("div");
  dialog.setAttribute("role", "dialog");
  dialog.innerHTML = "<p>Send invitation emails?</p>"
      + "<button onclick='window.invited = true'>Send</button>";
  document.body.appendChild(dialog);
}
</script>
""", title="Google Calendar")


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path, candidate=300)


@pytest.fixture
def calendar_sites(sites):
    sites.add(CALENDAR_URL, CALENDAR_HTML)
    sites.add(EVENT_EDIT_URL, SECOND_SEND_ONLY_HTML)
    sites.add("https://app.anyteam.com/home", html("<nav data-sidebar>Anyteam</nav>"))
    return sites


def test_send_candidates_come_before_save():
    send = GoogleCalendarPage.send_button.selectors
    save = GoogleCalendarPage.save_button.selectors

    assert SEND_OR_SAVE.selectors == send + save


class TestSaveEvent:
    @pytest.mark.asyncio
    async def test_clicks_second_send_candidate(self, calendar_sites, open_page, settings):
        page = await open_page(EVENT_EDIT_URL)
        calendar = GoogleCalendarActions(SessionBridge(page), settings)

        outcome = await calendar.save_event()

        assert outcome.clicked == GoogleCalendarPage.send_button.selectors[1]
        assert await page.evaluate("window.sent") is True
        assert outcome.invitation_sent is True
        assert await page.evaluate("window.invited") is True
        assert outcome.invited_all_guests is False
        assert outcome.event_visible is None

    @pytest.mark.asyncio
    async def test_no_send_or_save_button(self, sites, open_page, settings):
        sites.add(EVENT_EDIT_URL, html("<p>Nothing to save</p>"))
        page = await open_page(EVENT_EDIT_URL)
        calendar = GoogleCalendarActions(SessionBridge(page), settings)

        with pytest.raises(ElementNotFound) as exc_info:
            await calendar.save_event()

        assert exc_info.value.attempted == SEND_OR_SAVE.describe()


class TestCreateMeeting:
    @pytest.mark.asyncio
    async def test_create_meeting_fills_and_saves(self, calendar_sites, page, settings):
        session = SessionBridge(page)
        calendar = GoogleCalendarActions(session, settings)
        details = MeetingDetails(title="Team Sync", date=date(2026, 10, 20),
                                 start_time="2:00pm", end_time="3:00pm")

        await calendar.navigate_to_calendar()
        outcome = await calendar.create_meeting(details)

        saved = await page.evaluate("window.saved")
        assert saved == {"title": "Team Sync", "start": "2:00pm", "end": "3:00pm"}
        assert outcome.clicked == GoogleCalendarPage.save_button.selectors[0]
        assert outcome.event_visible is True
        assert await page.evaluate("window.dateTyped") == "Tuesday, October 20"

    @pytest.mark.asyncio
    async def test_schedule_meeting_returns_to_app_tab(self, calendar_sites, page, settings):
        await page.goto("https://app.anyteam.com/home")
        session = SessionBridge(page)
        details = MeetingDetails(title="Team Sync", date=date(2026, 10, 20),
                                 start_time="2:00pm", end_time="3:00pm")

        outcome = await schedule_meeting(session, details, settings)

        assert outcome.event_visible is True
        assert session.current() is page
        assert len(page.context.pages) == 1


class TestJoinGoogleMeet:
    @pytest.mark.asyncio
    async def test_join_hands_session_to_meet(self, sites, open_page, settings):
        sites.add(EVENT_EDIT_URL, html(
            "<button onclick=\"window.open('https://meet.google.com/abc-defg-hij')\">"
            "Join with Google Meet</button>"))
        sites.add("https://meet.google.com/abc-defg-hij", html("Ready to join?"))
        page = await open_page(EVENT_EDIT_URL)
        session = SessionBridge(page)

        meet = await GoogleCalendarActions(session, settings).join_google_meet()

        assert meet is session.current()
        assert meet.url == "https://meet.google.com/abc-defg-hij"
