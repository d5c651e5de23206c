# clickbeard/errors.py

"""
Domain exceptions.

Each carries the HTTP status it maps to; the handlers in ``main`` render
them as ``{"error": message}``.
"""


class ClickBeardError(Exception):
    status_code = 500
    message = "Algo deu errado!"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message


class ValidationError(ClickBeardError):
    status_code = 400
    message = "Dados inválidos"


class ConflictError(ClickBeardError):
    status_code = 400
    message = "Registro já existe"


class AuthenticationError(ClickBeardError):
    status_code = 401
    message = "Token inválido"


class ForbiddenError(ClickBeardError):
    status_code = 403
    message = "Não autorizado"


class NotFoundError(ClickBeardError):
    status_code = 404
    message = "Não encontrado"


class BookingError(ValidationError):
    """Base exception for booking rule violations."""


class SpecialtyMismatchError(BookingError):
    message = "Barbeiro não possui essa especialidade"


class OutsideWorkingHoursError(BookingError):
    message = "Horário fora do expediente (8h-18h)"


class OffSlotGridError(BookingError):
    message = "Horário deve estar em intervalos de 30 minutos"


class SlotTakenError(BookingError, ConflictError):
    message = "Horário já ocupado para este barbeiro"


class PastAppointmentError(BookingError):
    message = "Não é possível agendar no passado"


class NotCancellableError(ValidationError):
    message = "Agendamento não pode ser cancelado"


class CancellationWindowError(ValidationError):
    message = "Cancelamento deve ser feito com pelo menos 2 horas de antecedência"
