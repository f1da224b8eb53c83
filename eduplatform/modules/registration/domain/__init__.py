"""
Registration Domain

Pure local rules of the registration flow. Nothing in this package performs
I/O; the RegistrationGateway contract is implemented in the infrastructure
layer.
"""
