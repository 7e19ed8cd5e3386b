"""Prompt text and fixed user-facing strings for the marketplace assistant."""

from __future__ import annotations

from textwrap import dedent


SEED_PROMPTS = (
    "Check Phone Prices",
    "Laptops in Egerton",
    "Search Nakuru Shops",
)

FALLBACK_REPLY_TEXT = (
    "I encountered a slight issue connecting to the market brain. "
    "Please check your internet and try again."
)

EMPTY_REPLY_TEXT = "I'm looking that up for you. One moment."


def render_system_instruction(inventory_context: str, *, currency: str = "KES") -> str:
    """Return the assistant persona with the current inventory embedded."""

    # dedent runs before the inventory is spliced in so multi-line context
    # does not defeat the common-indent detection.
    template = dedent(
        """
        You are the HarMarket Assistant for Nakuru and Egerton University.

        CURRENT MARKET INVENTORY:
        {inventory}

        MISSION:
        - Help users find items in our Nakuru/Egerton inventory.
        - If you recommend an item, YOU MUST USE THE FORMAT: [ID: product-id].
        - If a user asks for something not in stock, use Google Search to find current market prices in Kenya or nearby shops.
        - Be conversational, friendly, and helpful. Mention specific campus spots like Egerton Main, Njoro, or Nakuru CBD.
        - Bold prices like **{currency} 1,200**.
        """
    ).strip()
    return template.format(inventory=inventory_context, currency=currency)


__all__ = [
    "EMPTY_REPLY_TEXT",
    "FALLBACK_REPLY_TEXT",
    "SEED_PROMPTS",
    "render_system_instruction",
]
