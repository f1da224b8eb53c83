# 📄 File: eduplatform/modules/registration/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Builds a ready-to-use registration process connected to the real sign-in service.
# 🧪 Purpose (Technical Summary):
# Factory wiring the identity-service-backed RegistrationGateway and the registration
# tunables from settings into a RegistrationWizard.
# 🔗 Dependencies:
# supabase (AsyncClient), shared settings, auth dependencies
# 🔄 Connected Modules / Calls From:
# Presentation layer (register page)

from typing import Optional

from supabase import AsyncClient

from eduplatform.modules.auth.dependencies import get_identity_service
from eduplatform.shared.config.settings import Settings, get_settings
from .application.wizard import RegistrationWizard
from .infrastructure.identity_gateway import IdentityRegistrationGateway


async def create_registration_wizard(
    client: Optional[AsyncClient] = None,
    settings: Optional[Settings] = None
) -> RegistrationWizard:
    """
    Build a RegistrationWizard backed by the Supabase identity service.

    Args:
        client: Supabase client; the shared one when omitted
        settings: Settings; the cached ones when omitted

    Returns:
        RegistrationWizard in the account info step
    """
    settings = settings or get_settings()
    gateway = IdentityRegistrationGateway(
        await get_identity_service(client),
        role=settings.DEFAULT_USER_ROLE
    )
    return RegistrationWizard(
        gateway,
        min_password_length=settings.PASSWORD_MIN_LENGTH,
        code_length=settings.VERIFICATION_CODE_LENGTH,
        resend_cooldown=settings.RESEND_COOLDOWN_SECONDS,
        notice_seconds=settings.RESEND_NOTICE_SECONDS
    )
