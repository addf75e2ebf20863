"""Status message templates for the daily close post."""

from .quote import QuoteSnapshot

INCREASE_TEMPLATE = "sıçmadı 😎\n{index} %{change} artışla kapandı."
DECREASE_TEMPLATE = "sıçtı 🤬\n{index} %{change} düşüşle kapandı."
DETAILS_TEMPLATE = "Önceki kapanış: {previous}\nSon: {latest}"


def compose_status(snapshot: QuoteSnapshot, index_name: str = "BIST100") -> str:
    """Pick the up/down template and fill in the formatted quote values."""
    template = INCREASE_TEMPLATE if snapshot.is_increase else DECREASE_TEMPLATE
    # The template wording carries the direction, so only the magnitude is shown.
    headline = template.format(index=index_name, change=f"{abs(snapshot.change_percent):.2f}")
    details = DETAILS_TEMPLATE.format(
        previous=f"{snapshot.previous_close:.3f}",
        latest=f"{snapshot.latest:.3f}",
    )
    return f"{headline}\n{details}"
