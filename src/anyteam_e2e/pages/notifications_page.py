"""
Notifications Page Object.

The notifications panel opens from the sidebar. Each notification is a
clickable row; right-clicking a row opens a context menu with read/unread
actions, and the list-filter button opens Read/Unread checkboxes.
"""

from typing import Optional

from playwright.async_api import Locator

from ..core.resolver import Candidates
from .base_page import BasePage

ITEM_SELECTOR = "div.flex.gap-3.px-4.py-3.border-b.border-b-zinc-100.items-start.cursor-pointer"


class NotificationsPage(BasePage):
    """Page Object for the notifications panel."""

    sidebar_button = Candidates.of(
        "Notifications",
        'button[data-sidebar="menu-button"]:has(h5:has-text("Notifications"))',
        'h5:has-text("Notifications")',
        'h5.text-grayText:has-text("Notifications")',
        'h5[class*="text-grayText"]:has-text("Notifications")',
        'h5[class*="pl-3"]:has-text("Notifications")',
        'h5[class*="text-[17px]"]:has-text("Notifications")',
        'button:has(h5:has-text("Notifications"))',
    )
    panel_heading = Candidates.of(
        "Notifications panel", 'h2:has-text("Notifications")')
    heading = Candidates.of(
        "Notifications heading",
        'h2:has-text("Notifications")',
        'h5:has-text("Notifications")',
    )

    notification_item = Candidates.of(
        "notification item",
        ITEM_SELECTOR,
        'div[class*="cursor-pointer"][class*="border-b"]',
        'div.cursor-pointer:has(img[alt="company-logo"])',
        'div.cursor-pointer:has-text("You have a meeting soon")',
        "div.cursor-pointer:has(svg.lucide-calendar)",
    )
    view_meeting_insights = Candidates.of(
        "View Meeting Insights",
        'div.border-t.border-t-zinc-100:has(span:has-text("View Meeting Insights")) '
        'span:has-text("View Meeting Insights")',
        'div[class*="border-t-zinc-100"] span:has-text("View Meeting Insights")',
        'span[class*="font-plus_jakarta_sans"]:has-text("View Meeting Insights")',
        'span[class*="text-nowrap"]:has-text("View Meeting Insights")',
        'span:has-text("View Meeting Insights")',
        'button:has-text("View Meeting Insights")',
        'a:has-text("View Meeting Insights")',
    )
    view_meeting_pre_read = Candidates.of(
        "View Meeting Pre-Read",
        'div.border-t.border-t-zinc-100 span:has-text("View Meeting Pre-Read")',
        'span:has-text("View Meeting Pre-Read")',
        'button:has-text("View Meeting Pre-Read")',
        'a:has-text("View Meeting Pre-Read")',
    )

    # Filter dropdown
    filter_button = Candidates.of(
        "filter",
        "button:has(svg.lucide-list-filter.h-5.w-5.text-zinc-600)",
        "button.h-9.w-9:has(svg.lucide-list-filter)",
        "button:has(svg.lucide-list-filter)",
    )
    read_checkbox = Candidates.of(
        "Read checkbox",
        'label:has-text("Read"):not(:has-text("Unread")) button[role="checkbox"]',
        'label:has-text("Read") button[type="button"][role="checkbox"]',
        'button[role="checkbox"]:near(label:has-text("Read"))',
    )
    unread_checkbox = Candidates.of(
        "Unread checkbox",
        'label:has-text("Unread") button[type="button"][role="checkbox"]',
        'label:has-text("Unread") button[role="checkbox"]',
        'button[role="checkbox"]:near(label:has-text("Unread"))',
    )
    filter_labels = Candidates.of(
        "filter options",
        'label:has-text("Read")',
        'label:has-text("Unread")',
    )
    apply_filters_button = Candidates.of(
        "Apply filters",
        'button:has-text("Apply filters")',
        'button.bg-neutral-900:has-text("Apply filters")',
    )
    clear_all_button = Candidates.of(
        "Clear all",
        'button:has-text("Clear all")',
        'button.text-xs:has-text("Clear all")',
    )

    # Three-dot menu
    three_dot_menu = Candidates.of(
        "notifications menu",
        'div[role="button"].cursor-pointer:has(svg.lucide-ellipsis-vertical.w-6.h-6)',
        'div[role="button"]:has(svg.lucide-ellipsis-vertical)',
        "button:has(svg.lucide-ellipsis-vertical.w-6.h-6)",
        "button:has(svg.lucide-ellipsis-vertical)",
        '[role="button"]:has(svg.lucide-ellipsis-vertical)',
    )
    mark_all_as_read_button = Candidates.of(
        "Mark all as read",
        'button.w-full.text-left.px-4.py-3:has-text("Mark all as read")',
        'button.w-full.text-left:has-text("Mark all as read")',
        'button:has-text("Mark all as read")',
        '[role="menuitem"]:has-text("Mark all as read")',
    )

    # Context menu of a single notification
    mark_as_read_button = Candidates.of(
        "Mark as Read",
        'button:has-text("Mark as Read")',
        '[role="menuitem"]:has-text("Mark as Read")',
        '[class*="menu"] button:has-text("Mark as Read")',
    )
    mark_as_unread_button = Candidates.of(
        "Mark as Unread",
        'button:has-text("Mark Selected as Unread")',
        'button:has-text("Mark as Unread")',
        '[role="menuitem"]:has-text("Mark as Unread")',
        '[role="menuitem"]:has-text("Mark Selected as Unread")',
    )

    @staticmethod
    def meeting_notification(title: str) -> Candidates:
        return Candidates.of(
            f"notification {title}",
            f'{ITEM_SELECTOR}:has-text("{title}")',
            f'div.cursor-pointer:has-text("{title}")',
        )

    @property
    def items(self) -> Locator:
        """All notification rows, in display order."""
        return self.page.locator(ITEM_SELECTOR)

    async def is_panel_open(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.panel_heading, timeout)

    async def is_displayed(self, timeout: Optional[int] = None) -> bool:
        return await self.is_visible(self.heading, timeout)
