from .stations import StationRepository
from .trains import TrainRepository
from .routes import RouteRepository
from .users import UserRepository
