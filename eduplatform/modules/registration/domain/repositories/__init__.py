from .registration_gateway import RegistrationGateway

__all__ = ["RegistrationGateway"]
