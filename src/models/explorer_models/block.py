from typing import Any
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ScriptPubKey(BaseModel):
    """
    Locking script of an output
    e.g.
    {
      "asm": "OP_RETURN 5465737431323334",
      "hex": "6a085465737431323334",
      "type": "nulldata"
    }
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    asm: str | None = None
    hex: str | None = None
    script_type: str | None = Field(default=None, alias="type")


class Vout(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: float | None = None
    n: int | None = None
    script_pub_key: ScriptPubKey | None = Field(
        default=None,
        validation_alias=AliasChoices("script_pub_key", "scriptPubKey"),
    )


class ScriptSig(BaseModel):
    model_config = ConfigDict(frozen=True)

    asm: str | None = None
    hex: str | None = None


class Vin(BaseModel):
    """
    An input is either the coinbase marker of the first transaction in a block,
    or a reference to a previous output (txid, vout) with its unlocking script
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    coinbase: str | None = None
    txid: str | None = None
    vout: int | None = None
    script_sig: ScriptSig | None = Field(
        default=None,
        validation_alias=AliasChoices("script_sig", "scriptSig"),
    )
    sequence: int | None = None


class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    hex: str | None = None
    vin: list[Vin] = Field(default_factory=list)
    vout: list[Vout] = Field(default_factory=list)


class Block(BaseModel):
    model_config = ConfigDict(frozen=True)

    tx: list[Transaction]


class BlockHeightResponse(BaseModel):
    """
    the top level model returned by the explorer for /block-height/{height}?format=json
    only the first block is of interest, the others are orphaned blocks at the same height
    """

    model_config = ConfigDict(frozen=True)

    blocks: list[Block]

    @staticmethod
    def from_json(data: dict[str, Any]) -> "BlockHeightResponse":
        return BlockHeightResponse.model_validate(data)
