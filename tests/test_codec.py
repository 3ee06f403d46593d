"""Tests for the command URL codec."""

from datetime import date
from decimal import Decimal
from urllib.parse import parse_qs, urlsplit

import pytest

from famzoo_commands.models.command import AccountBalanceResponse, CommandResponse
from famzoo_commands.models.vocabulary import CommandAction, CommandType, ParameterType
from famzoo_commands.services.transport import CommandURLCodec


@pytest.fixture
def codec(parameter_parser) -> CommandURLCodec:
    return CommandURLCodec(parameter_parser=parameter_parser)


def _query(url: str) -> dict:
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query, keep_blank_values=True).items()}


class TestEncode:
    """Tests for encoding commands."""

    def test_command_url(self, parser, codec):
        url = codec.encode(parser.parse("account credit 25.00 --note lunch"))

        assert url.startswith("famzoo://command?")
        query = _query(url)
        assert query["type"] == "account"
        assert query["action"] == "credit"
        assert query["raw"] == "account credit 25.00 --note lunch"
        assert query["param_0"] == "25.00"
        assert query["param_0_type"] == "amount"
        assert query["param_1_name"] == "note"
        assert query["param_1_required"] == "false"

    def test_result_url(self, parser, codec):
        response = CommandResponse.ok("Done", data={"balance": Decimal("150.50")})
        url = codec.encode_result(parser.parse("a c 25"), response)

        assert url.startswith("famzoo://result?")
        query = _query(url)
        assert query["success"] == "true"
        assert query["message"] == "Done"
        assert query["command"] == "a c 25"
        assert query["data_balance"] == "150.50"

    def test_balance_url(self, codec):
        response = AccountBalanceResponse.for_account("Parent Account", Decimal("1000.00"), "ok")
        query = _query(codec.encode_balance(response))
        assert query == {"account": "Parent Account", "balance": "1000.00", "success": "true"}

    def test_error_url(self, codec):
        query = _query(codec.encode_error(ValueError("bad input")))
        assert query == {"message": "bad input", "type": "ValueError"}

    def test_custom_scheme(self, parser, parameter_parser):
        codec = CommandURLCodec(scheme="famzoo-dev", parameter_parser=parameter_parser)
        assert codec.encode(parser.parse("a b")).startswith("famzoo-dev://command?")


class TestDecode:
    """Tests for decoding command URLs."""

    @pytest.mark.parametrize("text", [
        "account balance",
        'account credit 25.00 --note "lunch money" -urgent',
        'item due 12/25/24 "walk the dog"',
        'list add "buy & sell = profit?"',
    ])
    def test_round_trip(self, parser, codec, text):
        command = parser.parse(text)
        assert codec.decode(codec.encode(command)) == command

    def test_positional_and_flags_stay_distinct(self, parser, codec):
        decoded = codec.decode(codec.encode(parser.parse("list show Groceries --list Chores")))

        assert [p.string_value for p in decoded.extra_arguments()] == ["Groceries"]
        assert decoded.named("list").string_value == "Chores"

    def test_values_are_recoerced(self, codec):
        url = "famzoo://command?type=item&action=due&raw=x&param_0=2024-12-25&param_0_type=date"
        decoded = codec.decode(url)

        assert decoded.key == (CommandType.ITEM, CommandAction.DUE)
        assert decoded.parameters[0].type == ParameterType.DATE
        assert decoded.parameters[0].date_value == date(2024, 12, 25)
        assert decoded.parameters[0].name == "date"
        assert decoded.parameters[0].is_required

    @pytest.mark.parametrize("url", [
        "https://command?type=account&action=balance",
        "famzoo://result?type=account&action=balance",
        "famzoo://command?type=wallet&action=balance",
        "famzoo://command?type=account",
        "famzoo://command?type=account&action=balance&param_0=x&param_0_type=blob",
    ])
    def test_rejected_urls(self, codec, url):
        assert codec.decode(url) is None

    def test_decode_result(self, parser, codec):
        response = CommandResponse.failure("Nope", data={"reason": "closed"})
        decoded = codec.decode_result(codec.encode_result(parser.parse("a b"), response))

        assert decoded.success is False
        assert decoded.message == "Nope"
        assert decoded.data == {"reason": "closed"}
