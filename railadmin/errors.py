class RailAdminError(Exception):
    """Base class for errors raised by the services."""


class DuplicateUserError(RailAdminError):
    def __init__(self, username):
        super().__init__(f"Username '{username}' already exists")
        self.username = username
