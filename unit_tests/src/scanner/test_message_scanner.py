import pytest

from src.models.explorer_models.block import ScriptPubKey, ScriptSig, Transaction, Vin, Vout
from src.scanner.message_scanner import TransactionMessageScanner

HELLO_HEX: str = "48656c6c6f"
TEST1234_HEX: str = "5465737431323334"
P2PKH_HEX: str = "76a91462e907b15cbf27d5425399ebf6f0fb50ebb88f1888ac"


class TestTransactionMessageScanner:
    """
    test that the scanner labels each hidden message by its source field and keeps a stable order
    Prepare: dummy transactions built from the explorer models
    Act: TransactionMessageScanner.scan
    Assert: the list of labeled messages
    Teardown: None
    """

    @pytest.fixture()
    def scanner(self) -> TransactionMessageScanner:
        return TransactionMessageScanner()

    def test_coinbase_message(self, scanner: TransactionMessageScanner) -> None:
        tx: Transaction = Transaction(hash="aa", vin=[Vin(coinbase=HELLO_HEX)])
        assert scanner.scan(tx) == ["Coinbase: Hello"]

    def test_nulldata_output_is_op_return(self, scanner: TransactionMessageScanner) -> None:
        tx: Transaction = Transaction(
            hash="bb",
            vout=[Vout(value=0.0, n=0, script_pub_key=ScriptPubKey(hex=TEST1234_HEX, script_type="nulldata"))],
        )
        assert scanner.scan(tx) == ["OP_RETURN: Test1234"]

    def test_other_output_is_script_pub_key(self, scanner: TransactionMessageScanner) -> None:
        tx: Transaction = Transaction(
            hash="cc",
            vout=[Vout(value=0.5, n=0, script_pub_key=ScriptPubKey(hex=TEST1234_HEX, script_type="pubkeyhash"))],
        )
        assert scanner.scan(tx) == ["ScriptPubKey: Test1234"]

    def test_output_without_type_is_script_pub_key(self, scanner: TransactionMessageScanner) -> None:
        tx: Transaction = Transaction(hash="cd", vout=[Vout(script_pub_key=ScriptPubKey(hex=TEST1234_HEX))])
        assert scanner.scan(tx) == ["ScriptPubKey: Test1234"]

    def test_script_sig_message(self, scanner: TransactionMessageScanner) -> None:
        tx: Transaction = Transaction(
            hash="dd",
            vin=[Vin(txid="ee", vout=1, sequence=4294967295, script_sig=ScriptSig(asm="Hello", hex=HELLO_HEX))],
        )
        assert scanner.scan(tx) == ["ScriptSig: Hello"]

    def test_no_hex_fields_yields_nothing(self, scanner: TransactionMessageScanner) -> None:
        tx: Transaction = Transaction(
            hash="ff",
            vin=[Vin(txid="ee", vout=0), Vin(script_sig=ScriptSig(asm="OP_0"))],
            vout=[Vout(value=1.0, n=0), Vout(value=2.0, n=1, script_pub_key=ScriptPubKey(script_type="nulldata"))],
        )
        assert scanner.scan(tx) == []

    def test_binary_scripts_yield_nothing(self, scanner: TransactionMessageScanner) -> None:
        tx: Transaction = Transaction(
            hash="ab",
            vin=[Vin(coinbase="04ffff001d0104")],
            vout=[Vout(script_pub_key=ScriptPubKey(hex=P2PKH_HEX, script_type="pubkeyhash"))],
        )
        assert scanner.scan(tx) == []

    def test_invalid_field_does_not_stop_the_scan(self, scanner: TransactionMessageScanner) -> None:
        """
        GIVEN a transaction whose first fields are malformed hex
        WHEN scanned
        THEN later fields are still checked
        """
        tx: Transaction = Transaction(
            hash="ac",
            vin=[Vin(coinbase="abc", script_sig=ScriptSig(hex="not hex")), Vin(coinbase=HELLO_HEX)],
            vout=[Vout(script_pub_key=ScriptPubKey(hex="0")), Vout(script_pub_key=ScriptPubKey(hex=TEST1234_HEX, type="nulldata"))],
        )
        assert scanner.scan(tx) == ["Coinbase: Hello", "OP_RETURN: Test1234"]

    def test_empty_hex_is_reported_as_empty_message(self, scanner: TransactionMessageScanner) -> None:
        tx: Transaction = Transaction(hash="ad", vin=[Vin(coinbase="")])
        assert scanner.scan(tx) == ["Coinbase: "]

    def test_inputs_precede_outputs_in_field_order(self, scanner: TransactionMessageScanner) -> None:
        """
        GIVEN several qualifying inputs and outputs
        WHEN scanned
        THEN all input messages come first, each group in its original order
        """
        tx: Transaction = Transaction(
            hash="ae",
            vin=[
                Vin(coinbase="6669727374", script_sig=ScriptSig(hex="7365636f6e64")),
                Vin(script_sig=ScriptSig(hex="7468697264")),
            ],
            vout=[
                Vout(n=0, script_pub_key=ScriptPubKey(hex="666f75727468", script_type="pubkeyhash")),
                Vout(n=1, script_pub_key=ScriptPubKey(hex="6669667468", script_type="nulldata")),
            ],
        )
        assert scanner.scan(tx) == [
            "Coinbase: first",
            "ScriptSig: second",
            "ScriptSig: third",
            "ScriptPubKey: fourth",
            "OP_RETURN: fifth",
        ]
