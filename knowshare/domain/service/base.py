"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the business logic that spans several records or
    collaborators rather than a single entity.
    """

    pass
