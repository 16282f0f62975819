from aec_validation.models.ticket import ApiSnapshot, CodeSnapshot, RepositoryContext, Ticket, TicketType

__all__ = ["ApiSnapshot", "CodeSnapshot", "RepositoryContext", "Ticket", "TicketType"]
