FIRST_CLASS_MULTIPLIER = 1.5


def ticket_price(base_price: float, first_class: bool = False) -> float:
    return base_price * FIRST_CLASS_MULTIPLIER if first_class else base_price


def total_revenue(tickets) -> float:
    return sum((ticket.price for ticket in tickets), 0.0)
