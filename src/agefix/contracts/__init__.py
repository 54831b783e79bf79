"""
Contract helpers - convenience wrappers over LedgerClient.

- templates: pure source generators for the token and NFT contracts
- token:     TokenHelper (deploy, balance_of, transfer, approve, transfer_from)
- nft:       NFTHelper (deploy, mint, owner_of, token_uri, balance_of)
"""

from .nft import NFTHelper
from .templates import nft_source, token_source
from .token import TokenHelper

__all__ = ["NFTHelper", "TokenHelper", "nft_source", "token_source"]
