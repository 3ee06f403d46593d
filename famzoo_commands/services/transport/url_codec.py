"""
Command URL Codec

Serializes commands and their responses into custom-scheme URLs so they
can ride along with a chat message:

    famzoo://command?type=account&action=credit&raw=...&param_0=25.00
        &param_0_type=amount&param_0_name=amount&param_0_required=true

    famzoo://result?success=true&message=...&command=...&data_balance=150.50

Every parameter carries its name and required flag next to its type, so
decoding tells positional parameters apart from flags. URLs produced
before those fields existed still decode: the name falls back to the
type's default and the parameter is treated as required.
"""

from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit

import structlog

from famzoo_commands.models.command import AccountBalanceResponse, Command, CommandResponse
from famzoo_commands.models.vocabulary import CommandAction, CommandType, ParameterType
from famzoo_commands.parser.parameters import ParameterParser


logger = structlog.get_logger(__name__)

COMMAND_HOST = "command"
RESULT_HOST = "result"
BALANCE_HOST = "balance"
ERROR_HOST = "error"


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


class CommandURLCodec:
    """Encodes commands to URLs and decodes them back."""

    def __init__(
        self,
        scheme: str = "famzoo",
        parameter_parser: Optional[ParameterParser] = None,
    ):
        self._scheme = scheme
        self._parameter_parser = parameter_parser or ParameterParser()

    @property
    def scheme(self) -> str:
        return self._scheme

    def _url(self, host: str, query: list[tuple[str, str]]) -> str:
        return f"{self._scheme}://{host}?{urlencode(query)}"

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def encode(self, command: Command) -> str:
        query = [
            ("type", command.type.value),
            ("action", command.action.value),
            ("raw", command.raw_text),
        ]
        for index, parameter in enumerate(command.parameters):
            prefix = f"param_{index}"
            query.extend([
                (prefix, parameter.raw_value),
                (f"{prefix}_type", parameter.type.value),
                (f"{prefix}_name", parameter.name),
                (f"{prefix}_required", _bool_text(parameter.is_required)),
            ])
        return self._url(COMMAND_HOST, query)

    def encode_result(self, command: Command, response: CommandResponse) -> str:
        """Response URL; data values are flattened to ``data_<key>`` strings."""
        query = [
            ("success", _bool_text(response.success)),
            ("message", response.message),
            ("command", command.raw_text),
        ]
        for key, value in (response.data or {}).items():
            query.append((f"data_{key}", str(value)))
        return self._url(RESULT_HOST, query)

    def encode_balance(self, response: AccountBalanceResponse) -> str:
        return self._url(BALANCE_HOST, [
            ("account", response.account_name),
            ("balance", str(response.balance)),
            ("success", _bool_text(response.success)),
        ])

    def encode_error(self, error: Exception) -> str:
        return self._url(ERROR_HOST, [
            ("message", str(error)),
            ("type", type(error).__name__),
        ])

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def decode(self, url: str) -> Optional[Command]:
        """
        Rebuild a command from a URL produced by encode().

        Returns None for a foreign scheme or host, a missing header field,
        or an unknown type or action. Parameter values are re-coerced from
        their raw text, so decoding never depends on how values were
        printed.
        """
        parts = urlsplit(url)
        if parts.scheme != self._scheme or parts.netloc != COMMAND_HOST:
            return None

        params = {key: values[0] for key, values in parse_qs(parts.query, keep_blank_values=True).items()}

        try:
            command_type = CommandType(params["type"])
            action = CommandAction(params["action"])
        except (KeyError, ValueError):
            logger.debug("command_url_rejected", url=url)
            return None

        parameters = []
        index = 0
        while f"param_{index}" in params and f"param_{index}_type" in params:
            prefix = f"param_{index}"
            try:
                parameter_type = ParameterType(params[f"{prefix}_type"])
            except ValueError:
                logger.debug("command_url_rejected", url=url, parameter=index)
                return None

            parameters.append(self._parameter_parser.coerce(
                parameter_type,
                params[prefix],
                name=params.get(f"{prefix}_name"),
                is_required=params.get(f"{prefix}_required", "true") == "true",
            ))
            index += 1

        return Command(
            type=command_type,
            action=action,
            parameters=tuple(parameters),
            raw_text=params.get("raw", ""),
        )

    def decode_result(self, url: str) -> Optional[CommandResponse]:
        """Response from a result URL. Data values come back as strings."""
        parts = urlsplit(url)
        if parts.scheme != self._scheme or parts.netloc != RESULT_HOST:
            return None

        params = {key: values[0] for key, values in parse_qs(parts.query, keep_blank_values=True).items()}
        if "success" not in params or "message" not in params:
            return None

        data = {key[len("data_"):]: value for key, value in params.items() if key.startswith("data_")}
        return CommandResponse(
            success=params["success"] == "true",
            message=params["message"],
            data=data or None,
        )
