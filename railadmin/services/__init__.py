from .audit import AuditService
from .stations import StationService
from .tickets import TicketService
from .users import UserService
