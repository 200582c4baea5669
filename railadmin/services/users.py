import logging

from ..entities import Admin, Customer
from ..errors import DuplicateUserError
from ..repositories import UserRepository
from .. import schemas

logger = logging.getLogger(__name__)


class UserService:
    """Accounts plus the single logged-in session.

    Users are cached in memory by username; the store is consulted on a
    cache miss and the result cached.
    """

    def __init__(self, user_repository: UserRepository | None = None):
        self.user_repository = user_repository
        self.users = {}
        self.current_user = None

        if user_repository is not None:
            for user in user_repository.find_all():
                self.users[user.username] = user


    def find_user(self, username):
        user = self.users.get(username)
        if user is None and self.user_repository is not None:
            user = self.user_repository.find_by_username(username)
            if user is not None:
                self.users[username] = user
        return user


    def _admit(self, user):
        self.users[user.username] = user
        if self.user_repository is not None:
            self.user_repository.save(user)
        return user


    def register_admin(self, username, password):
        return self._admit(Admin(username, password))


    def register_customer(self, username, password, full_name, email):
        #1. validate (raises pydantic.ValidationError)
        data = schemas.CustomerCreate(username=username, password=password, full_name=full_name, email=email)

        #2. usernames are unique across admins and customers
        if self.find_user(data.username) is not None:
            raise DuplicateUserError(data.username)

        #3. save
        customer = Customer(data.username, data.password, data.full_name, str(data.email))
        logger.info("Registered customer %s", customer.username)
        return self._admit(customer)


    def login(self, username, password):
        user = self.find_user(username)
        if user is not None and user.authenticate(password):
            self.current_user = user
            return True

        logger.info("Failed login for %s", username)
        return False


    def logout(self):
        self.current_user = None


    def is_logged_in(self):
        return self.current_user is not None


    def is_admin(self):
        return self.is_logged_in() and isinstance(self.current_user, Admin)


    def clear_customers(self):
        """Drop every customer account, keeping the admins."""
        admins = {name: user for name, user in self.users.items() if isinstance(user, Admin)}
        if self.user_repository is not None:
            count = self.user_repository.clear_all_except_admin()
        else:
            count = len(self.users) - len(admins)

        self.users = admins
        if self.current_user is not None and not isinstance(self.current_user, Admin):
            self.current_user = None
        return count
