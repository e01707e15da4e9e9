from .receive_attachment import ReceiveAttachmentUseCase, StoredAttachment
from .register_user import RegisterUserUseCase
from .registration_flow import RegistrationFlow, RegistrationOutcome, RegistrationStage

__all__ = [
    "ReceiveAttachmentUseCase",
    "RegisterUserUseCase",
    "RegistrationFlow",
    "RegistrationOutcome",
    "RegistrationStage",
    "StoredAttachment",
]
