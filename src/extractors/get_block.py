import asyncio
import aiohttp
import logging
from pprint import pprint
from typing import Any
from dotenv import load_dotenv
from pydantic import ValidationError

from src.exceptions import BlockFetchError
from src.models.explorer_models.block import Block, BlockHeightResponse
from src.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)
setup_logging(logger)

DEFAULT_EXPLORER_URL: str = "https://blockchain.info"
DEFAULT_TIMEOUT_SECONDS: float = 30.0


class BlockExtractor:
    """
    Responsible for getting a single block by its height from the explorer
    The ClientSession only lives for the duration of one request, there is no retry
    """

    def __init__(
        self,
        base_url: str = DEFAULT_EXPLORER_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def block_height_url(self, block_height: str) -> str:
        # height is forwarded verbatim
        return f"{self._base_url}/block-height/{block_height}?format=json"

    @staticmethod
    def parse_block_response(data: Any) -> Block:
        try:
            response: BlockHeightResponse = BlockHeightResponse.from_json(data)
        except ValidationError as e:
            raise BlockFetchError(f"Malformed block response: {e}") from e
        if not response.blocks:
            raise BlockFetchError("No blocks found")
        return response.blocks[0]

    async def get_block(self, block_height: str) -> Block:
        url: str = self.block_height_url(block_height)
        logger.info(f"Fetching block at height {block_height} from {url}")

        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as client:
                async with client.get(url=url) as response:
                    if response.status != 200:
                        raise BlockFetchError(f"Received non-status code 200: {response.status}")
                    data: Any = await response.json(content_type=None)
        except BlockFetchError:
            logger.error(f"Explorer rejected request for block at height {block_height}")
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Request for block at height {block_height} failed: {e!r}")
            raise BlockFetchError(str(e) or type(e).__name__) from e

        return self.parse_block_response(data)


if __name__ == "__main__":
    load_dotenv()
    event_loop: asyncio.AbstractEventLoop = asyncio.new_event_loop()
    result: Block = event_loop.run_until_complete(BlockExtractor().get_block("170"))
    pprint(result)
