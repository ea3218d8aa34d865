"""Translate backend database errors to user-friendly messages."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, NamedTuple, Optional, Tuple, Union

from rich.markup import escape

from ..utils.error_handling import safe_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FriendlyError:
    """Title and description shown to the user in place of a raw error."""
    title: str
    description: str


@dataclass(frozen=True)
class BackendError:
    """Normalized view of whatever error object the backend client produced."""
    code: Optional[str] = None
    message: Optional[str] = None

    @property
    def lowered(self) -> str:
        return (self.message or "").lower()


Resolver = Union[FriendlyError, Callable[[BackendError], FriendlyError]]


class ErrorRule(NamedTuple):
    """One entry of the ordered rule list.

    A rule matches when ``code`` is None or equal to the error code, and
    ``keywords`` is empty or any keyword occurs in the lowercased message.
    """
    code: Optional[str]
    keywords: Tuple[str, ...]
    result: Resolver


GENERIC_ERROR = FriendlyError(
    title="Erro inesperado",
    description="Ocorreu um erro inesperado. Tente novamente.",
)

FALLBACK_ERROR = FriendlyError(
    title="Erro inesperado",
    description="Ocorreu um erro inesperado. Tente novamente ou contacte o suporte.",
)

# Column names as they appear in constraint messages -> label shown in forms.
# Scanned in order; first substring hit wins.
FIELD_LABELS: Tuple[Tuple[str, str], ...] = (
    ("title", "título"),
    ("name", "nome"),
    ("email", "email"),
    ("date", "data"),
    ("time", "horário"),
    ("price", "preço"),
    ("cost", "custo"),
    ("customer", "cliente"),
    ("location", "local"),
    ("description", "descrição"),
    ("numguests", "número de convidados"),
    ("duration", "duração"),
)

DEFAULT_FIELD_LABEL = "informado"


def extract_field_label(message: str) -> str:
    """Return the form label of the first known column named in ``message``."""
    lowered = message.lower()
    for column, label in FIELD_LABELS:
        if column in lowered:
            return label
    return DEFAULT_FIELD_LABEL


def _not_null_violation(error: BackendError) -> FriendlyError:
    field = extract_field_label(error.lowered)
    return FriendlyError(
        title="Campo obrigatório",
        description=f"O campo {field} é obrigatório.",
    )


def _raised_exception(error: BackendError) -> FriendlyError:
    # Messages raised by our own database functions are already user-facing
    return FriendlyError(
        title="Operação não permitida",
        description=error.message or "Esta operação não pode ser realizada.",
    )


class ErrorTranslator:
    """Translate backend errors to user-friendly messages."""

    RULES: Tuple[ErrorRule, ...] = (
        # 23505 unique_violation
        ErrorRule("23505", ("email",), FriendlyError(
            title="Email já cadastrado",
            description="Este email já está sendo usado por outro usuário.",
        )),
        ErrorRule("23505", ("nome", "name"), FriendlyError(
            title="Nome já existe",
            description="Já existe um registro com este nome.",
        )),
        ErrorRule("23505", (), FriendlyError(
            title="Dados duplicados",
            description="Já existe um registro com estas informações.",
        )),

        # 23503 foreign_key_violation
        ErrorRule("23503", ("customer",), FriendlyError(
            title="Cliente não encontrado",
            description="O cliente selecionado não existe mais.",
        )),
        ErrorRule("23503", ("recipe",), FriendlyError(
            title="Receita não encontrada",
            description="A receita selecionada não existe mais.",
        )),
        ErrorRule("23503", ("item",), FriendlyError(
            title="Item não encontrado",
            description="O item selecionado não existe mais.",
        )),
        ErrorRule("23503", (), FriendlyError(
            title="Referência inválida",
            description="Um dos dados selecionados não existe mais.",
        )),

        # 23514 check_violation
        ErrorRule("23514", ("price", "cost"), FriendlyError(
            title="Valor inválido",
            description="O preço ou custo deve ser maior que zero.",
        )),
        ErrorRule("23514", ("date",), FriendlyError(
            title="Data inválida",
            description="A data informada não é válida.",
        )),
        ErrorRule("23514", (), FriendlyError(
            title="Dados inválidos",
            description="Alguns dados não atendem aos critérios necessários.",
        )),

        # 23502 not_null_violation
        ErrorRule("23502", (), _not_null_violation),

        # 42P01 undefined_table
        ErrorRule("42P01", (), FriendlyError(
            title="Erro de sistema",
            description="Recurso temporariamente indisponível. Tente novamente.",
        )),

        # 42703 undefined_column
        ErrorRule("42703", (), FriendlyError(
            title="Erro de sistema",
            description="Dados não puderam ser processados. Contacte o suporte.",
        )),

        # P0001 raised_exception
        ErrorRule("P0001", (), _raised_exception),

        # Codes outside the table fall through to message categories
        ErrorRule(None, ("auth", "authentication"), FriendlyError(
            title="Erro de autenticação",
            description="Você precisa estar logado para realizar esta ação.",
        )),
        ErrorRule(None, ("policy", "permission", "rls"), FriendlyError(
            title="Acesso negado",
            description="Você não tem permissão para realizar esta ação.",
        )),
        ErrorRule(None, ("network", "fetch", "connection"), FriendlyError(
            title="Erro de conexão",
            description="Verifique sua conexão com a internet e tente novamente.",
        )),
        ErrorRule(None, ("insert",), FriendlyError(
            title="Erro ao criar",
            description="Não foi possível criar o registro. Verifique os dados e tente novamente.",
        )),
        ErrorRule(None, ("update",), FriendlyError(
            title="Erro ao atualizar",
            description="Não foi possível atualizar o registro. Verifique os dados e tente novamente.",
        )),
        ErrorRule(None, ("delete",), FriendlyError(
            title="Erro ao excluir",
            description="Não foi possível excluir o registro. Pode estar sendo usado em outro lugar.",
        )),
    )

    def translate(self, error: Any) -> FriendlyError:
        """Convert a backend error to a friendly title/description pair.

        Accepts a mapping with ``code``/``message`` keys, any object exposing
        those attributes, a plain exception or None. Never raises.
        """
        backend_error = safe_call(
            normalize_error,
            error,
            default=BackendError(),
            error_message="Could not read error object",
            logger_instance=logger,
        )

        if not backend_error.code and not backend_error.message:
            return GENERIC_ERROR

        for rule in self.RULES:
            if self._matches(rule, backend_error):
                result = rule.result
                return result(backend_error) if callable(result) else result

        return FALLBACK_ERROR

    @staticmethod
    def _matches(rule: ErrorRule, error: BackendError) -> bool:
        if rule.code is not None and rule.code != error.code:
            return False
        if not rule.keywords:
            return True
        message = error.lowered
        return any(keyword in message for keyword in rule.keywords)

    def format_for_cli(self, friendly_error: FriendlyError, original: Optional[BackendError] = None) -> str:
        """Format error for CLI display."""
        output = f"[bold red]{escape(friendly_error.title)}[/]\n\n"
        output += escape(friendly_error.description)

        # Technical details (if provided)
        if original is not None and (original.code or original.message):
            output += "\n\n[dim]Technical details:[/]\n"
            if original.code:
                output += f"[dim]code: {escape(original.code)}[/]\n"
            if original.message:
                output += f"[dim]message: {escape(original.message)}[/]"

        return output.rstrip("\n")


def normalize_error(error: Any) -> BackendError:
    """Pull ``code`` and ``message`` out of an arbitrary error object."""
    if error is None:
        return BackendError()

    if isinstance(error, BackendError):
        return error

    if isinstance(error, Mapping):
        code = error.get("code")
        message = error.get("message")
    else:
        code = getattr(error, "code", None)
        message = getattr(error, "message", None)
        if message is None and isinstance(error, BaseException):
            message = str(error)

    return BackendError(
        code=str(code) if code else None,
        message=str(message) if message else None,
    )


_default_translator = ErrorTranslator()


def translate_error(error: Any) -> FriendlyError:
    """Translate ``error`` with the default rule list."""
    return _default_translator.translate(error)


def handle_error(error: Any, logger_instance: Optional[logging.Logger] = None) -> FriendlyError:
    """Log the raw backend error and return its friendly translation."""
    log = logger_instance or logger
    backend_error = safe_call(
        normalize_error,
        error,
        default=BackendError(),
        error_message="Could not read error object",
        logger_instance=log,
    )
    friendly = translate_error(backend_error)
    log.warning(
        f"Backend error translated to '{friendly.title}': {backend_error.message or '<no message>'}",
        extra={"error_code": backend_error.code} if backend_error.code else None,
    )
    return friendly
