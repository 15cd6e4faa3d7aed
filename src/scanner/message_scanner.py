import logging

from src.models.explorer_models.block import Transaction
from src.scanner.hex_decoder import extract_hidden_message
from src.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)
setup_logging(logger)

NULLDATA_SCRIPT_TYPE: str = "nulldata"


class TransactionMessageScanner:
    """
    Responsible for surfacing printable ascii text hidden inside the hex fields of a transaction
    Inputs are checked first (coinbase, then scriptSig), then outputs (scriptPubKey), each in on-chain order
    A field that fails to decode or is not printable contributes nothing, the scan always completes
    """

    @staticmethod
    def scan(tx: Transaction) -> list[str]:
        messages: list[str] = []

        for vin in tx.vin:
            if vin.coinbase is not None:
                message: str | None = extract_hidden_message(vin.coinbase)
                if message is not None:
                    messages.append(f"Coinbase: {message}")

            if vin.script_sig is not None and vin.script_sig.hex is not None:
                message = extract_hidden_message(vin.script_sig.hex)
                if message is not None:
                    messages.append(f"ScriptSig: {message}")

        for vout in tx.vout:
            if vout.script_pub_key is None or vout.script_pub_key.hex is None:
                continue
            message = extract_hidden_message(vout.script_pub_key.hex)
            if message is None:
                continue
            # every printable locking script is reported, not only OP_RETURN outputs
            if vout.script_pub_key.script_type == NULLDATA_SCRIPT_TYPE:
                messages.append(f"OP_RETURN: {message}")
            else:
                messages.append(f"ScriptPubKey: {message}")

        logger.debug(f"Found {len(messages)} hidden messages in transaction {tx.hash}")
        return messages
