from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.user_repository import UserRepository
from ...domain.repositories.file_storage import FileStorage
from ...application.use_cases.auth.register_user import RegisterUserUseCase
from ...application.use_cases.auth.receive_attachment import ReceiveAttachmentUseCase
from ...application.use_cases.auth.registration_flow import RegistrationFlow

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class AuthProvider:
    """Registration use case provider - registers the registration pipeline pieces"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all registration use cases.
        Use cases are created on-demand via factories.
        """
        settings = container.get(Settings)

        # Register RegisterUserUseCase
        container.register_factory(
            RegisterUserUseCase,
            lambda: RegisterUserUseCase(
                user_repository=container.get(UserRepository)
            )
        )

        # Register ReceiveAttachmentUseCase
        container.register_factory(
            ReceiveAttachmentUseCase,
            lambda: ReceiveAttachmentUseCase(
                file_storage=container.get(FileStorage),
                naming_policy=settings.upload_naming,
            )
        )

        # Register RegistrationFlow
        container.register_factory(
            RegistrationFlow,
            lambda: RegistrationFlow(
                register_user=container.get(RegisterUserUseCase),
                receive_attachment=container.get(ReceiveAttachmentUseCase),
                file_storage=container.get(FileStorage),
                hash_cost=settings.hash_cost,
                password_min_length=settings.password_min_length,
            )
        )
