import logging
import os
import re
from asyncio import AbstractEventLoop, new_event_loop
import click
from dotenv import find_dotenv, load_dotenv

from src.exceptions import BlockFetchError, ConfigurationError, InvalidTransactionIndexError
from src.extractors.get_block import BlockExtractor, DEFAULT_EXPLORER_URL, DEFAULT_TIMEOUT_SECONDS
from src.models.explorer_models.block import Block, Transaction
from src.scanner.message_scanner import TransactionMessageScanner
from src.utils.logging_utils import apply_log_level, setup_logging

logger = logging.getLogger(__name__)
setup_logging(logger)

INVALID_TRANSACTION_NUMBER: str = "Invalid transaction number."

# ascii digits only, so "1_0" and non-ascii digits that int() accepts are rejected
TRANSACTION_NUMBER_PATTERN: re.Pattern = re.compile(r"\+?[0-9]+")


def select_transaction(block: Block, raw_index: str) -> tuple[int, Transaction]:
    """
    Parses the user supplied transaction number and returns it with the matching transaction
    """
    text: str = raw_index.strip()
    if TRANSACTION_NUMBER_PATTERN.fullmatch(text) is None:
        raise InvalidTransactionIndexError(INVALID_TRANSACTION_NUMBER)
    index: int = int(text)
    if index >= len(block.tx):
        raise InvalidTransactionIndexError(INVALID_TRANSACTION_NUMBER)
    return index, block.tx[index]


def resolve_timeout(timeout: float | None) -> float:
    """
    An explicit --timeout wins, including 0, otherwise BLOCK_EXPLORER_TIMEOUT is used
    """
    if timeout is not None:
        return timeout
    raw_timeout: str | None = os.getenv("BLOCK_EXPLORER_TIMEOUT")
    if raw_timeout is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        resolved: float = float(raw_timeout)
    except ValueError as e:
        raise ConfigurationError(f"BLOCK_EXPLORER_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from e
    if resolved < 0:
        raise ConfigurationError(f"BLOCK_EXPLORER_TIMEOUT must not be negative, got {raw_timeout!r}")
    return resolved


def render_transaction(tx: Transaction) -> str:
    return tx.model_dump_json(indent=2, by_alias=True)


def render_messages(messages: list[str]) -> list[str]:
    if not messages:
        return ["No hidden messages found in this transaction."]
    return ["Hidden messages found:", *messages]


class HiddenMessagePipeline:
    """
    Responsible for fetching one block, picking one of its transactions and reporting the hidden messages in it
    fetch is the only network call and is awaited before any interaction with the user
    """

    def __init__(self, extractor: BlockExtractor, scanner: TransactionMessageScanner) -> None:
        self._extractor = extractor
        self._scanner = scanner

    async def fetch(self, block_height: str) -> Block:
        block: Block = await self._extractor.get_block(block_height)
        logger.info(f"Block {block_height} fetched with {len(block.tx)} transactions")
        return block

    def report(self, block: Block, raw_index: str) -> list[str]:
        index, tx = select_transaction(block, raw_index)
        logger.info(f"Scanning transaction {index}: {tx.hash}")
        return [
            "Transaction details:",
            render_transaction(tx),
            *render_messages(self._scanner.scan(tx)),
        ]


@click.command(name="hidden-messages")
@click.argument("block_height")
@click.option("--tx-index", type=str, default=None, help="Transaction number, skips the prompt.")
@click.option("--explorer-url", type=str, default=None, help="Explorer base url, overrides BLOCK_EXPLORER_URL.")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Request timeout in seconds, overrides BLOCK_EXPLORER_TIMEOUT.",
)
def run(block_height: str, tx_index: str | None, explorer_url: str | None, timeout: float | None) -> None:
    load_dotenv(find_dotenv(usecwd=True))
    try:
        apply_log_level()
        timeout_seconds: float = resolve_timeout(timeout)
    except ConfigurationError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        raise SystemExit(1)

    extractor: BlockExtractor = BlockExtractor(
        base_url=explorer_url or os.getenv("BLOCK_EXPLORER_URL", DEFAULT_EXPLORER_URL),
        timeout_seconds=timeout_seconds,
    )
    pipeline: HiddenMessagePipeline = HiddenMessagePipeline(
        extractor=extractor,
        scanner=TransactionMessageScanner(),
    )

    event_loop: AbstractEventLoop = new_event_loop()
    try:
        block: Block = event_loop.run_until_complete(pipeline.fetch(block_height))
    except BlockFetchError as e:
        click.echo(f"Error fetching block data: {e}", err=True)
        raise SystemExit(1)
    finally:
        event_loop.close()

    tx_count: int = len(block.tx)
    click.echo(f"Block {block_height} contains {tx_count} transactions.")
    if tx_count == 0:
        click.echo(INVALID_TRANSACTION_NUMBER, err=True)
        raise SystemExit(1)

    if tx_index is None:
        # read once, an empty line goes on to select_transaction
        tx_index = click.prompt(
            f"Enter the transaction number (0 to {tx_count - 1})",
            type=str,
            default="",
            show_default=False,
        )

    try:
        lines: list[str] = pipeline.report(block, tx_index)
    except InvalidTransactionIndexError as e:
        click.echo(str(e), err=True)
        raise SystemExit(1)

    for line in lines:
        click.echo(line)


if __name__ == "__main__":
    run()
