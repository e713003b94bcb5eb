"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthorizationException(DomainException):
    """User not authorized for this operation"""
    pass


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class IllegalTransitionException(ValidationException):
    """Requested proposal status is not reachable for this actor"""

    def __init__(self, current: str, requested: str, role: str):
        self.current = current
        self.requested = requested
        self.role = role
        super().__init__(
            "status",
            f"illegal transition from '{current}' to '{requested}' for {role}"
        )


class ProposalFinalizedException(ValidationException):
    """Proposal already reached a terminal status"""

    def __init__(self, proposal_id: int, status: str):
        self.proposal_id = proposal_id
        self.status = status
        super().__init__("status", f"proposal {proposal_id} already finalized ({status})")


class RepositoryException(DomainException):
    """Database operation failed"""
    pass


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class OracleException(DomainException):
    """External text-generation call failed or replied with garbage"""
    pass
