from ..entities import Ticket
from ..pricing import total_revenue


class TicketService:
    def __init__(self):
        self._tickets = []

    def purchase_ticket(self, customer, schedule, first_class=False):
        ticket = Ticket(customer, schedule, first_class)

        # same object in both lists
        self._tickets.append(ticket)
        customer.add_ticket(ticket)
        return ticket

    def tickets_for(self, customer):
        return [ticket for ticket in self._tickets if ticket.customer == customer]

    def total_revenue(self):
        return total_revenue(self._tickets)

    def all_tickets(self):
        return list(self._tickets)
