"""
Domain-specific exception hierarchy for the slot availability engine.

Every error carries a ``user_message`` meant for the admin-facing caller;
the messages are distinct so a UI can show them verbatim.
"""


class SlotError(Exception):
    """Base class for all application-level errors."""

    user_message = "Não foi possível concluir a operação."

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.user_message)
        self.detail = detail


class ConfigError(SlotError):
    """Raised when the configuration file cannot be loaded."""

    user_message = "Configuração inválida."


class SlotValidationError(SlotError):
    """Raised before any store call when an admin request is rejected."""


class InvalidTime(SlotValidationError):
    """Time string does not match the 24h ``HH:MM`` pattern."""

    user_message = "Horário inválido."


class InvalidDate(SlotValidationError):
    """Date value cannot be read as a ``YYYY-MM-DD`` civil date."""

    user_message = "Data inválida."


class PastDate(SlotValidationError):
    """Date lies before today in the business time zone."""

    user_message = "Não é possível alterar horários de datas passadas."


class AlreadyOffered(SlotValidationError):
    """Time is already offered on that date."""

    user_message = "Esse horário já está marcado!"


class NotFixedTime(SlotValidationError):
    """Time is not part of the fixed template."""

    user_message = "Esse horário não é fixo; remova-o como horário extra."


class NotExtraSlot(SlotValidationError):
    """Record belongs to a fixed template time and cannot be deleted."""

    user_message = "Esse horário é fixo; ele só pode ser suspenso para a data."


class StoreError(SlotError):
    """Raised by store adapters."""

    user_message = "Falha ao acessar a agenda."


class NotFound(StoreError):
    """Record id no longer exists in the store."""

    user_message = "Esse horário não existe mais."


class WriteError(StoreError):
    """Store could not persist a mutation."""

    user_message = "Falha ao salvar a agenda. Tente novamente."
