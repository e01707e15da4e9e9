from .auth import (
    ReceiveAttachmentUseCase,
    RegisterUserUseCase,
    RegistrationFlow,
)

__all__ = [
    "ReceiveAttachmentUseCase",
    "RegisterUserUseCase",
    "RegistrationFlow",
]
