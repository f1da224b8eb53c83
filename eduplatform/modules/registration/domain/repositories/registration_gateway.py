# 📄 File: eduplatform/modules/registration/domain/repositories/registration_gateway.py
# 🧭 Purpose (Layman Explanation):
# What the registration steps need from the outside world: create the pending
# account, check the emailed code, and send a new code.
# 🧪 Purpose (Technical Summary):
# Collaborator contract of the registration wizard. Calls return ServiceResult
# values; transport failures are FailureKind.UNREACHABLE.
# 🔗 Dependencies:
# abc, typing, shared result types, RegistrationDraft
# 🔄 Connected Modules / Calls From:
# Registration wizard, identity-service-backed gateway adapter

from abc import ABC, abstractmethod
from typing import Optional

from eduplatform.shared.core.results import ServiceResult
from ..models.draft import RegistrationDraft


class RegistrationGateway(ABC):
    """
    Interface for the registration collaborator.
    """

    @abstractmethod
    async def submit_registration(self, draft: RegistrationDraft) -> ServiceResult[Optional[str]]:
        """
        Create a pending account from a validated draft.

        Args:
            draft: Validated registration draft

        Returns:
            Result carrying the new user id when the service reports it
        """
        pass

    @abstractmethod
    async def verify_code(self, email: str, code: str) -> ServiceResult[None]:
        """
        Confirm the pending account with the emailed code.

        Args:
            email: Address the code was sent to
            code: Six-digit code as entered

        Returns:
            Successful result once the account is verified
        """
        pass

    @abstractmethod
    async def resend_code(self, email: str) -> ServiceResult[None]:
        """Send a fresh verification code to ``email``."""
        pass
