from .identity_gateway import IdentityRegistrationGateway

__all__ = ["IdentityRegistrationGateway"]
