## Error taxonomy shared by the generation, chat and auth layers


class PathfinderError(Exception):
    pass


class ConfigurationError(PathfinderError):
    """Settings are missing or invalid; raised before the app serves anything."""


class GenerationFailed(PathfinderError):
    """The generative service could not be reached or rejected the call."""


class InvalidResponseFormat(PathfinderError):
    """The service answered, but not with a roadmap we can accept."""


class AuthError(PathfinderError):
    """Signup/login rejected; the message is safe to show to the user."""


class NotAuthenticated(Exception):
    pass
