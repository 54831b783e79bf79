"""
AGXCL contract source templates.

Pure functions: parameters in, contract source out. No I/O.
"""

from __future__ import annotations

import re

_UINT_RE = re.compile(r"^[0-9]+$")

_TOKEN_TEMPLATE = """\
contract Token {{
  state {{
    string name = "{name}";
    string symbol = "{symbol}";
    uint256 totalSupply = {total_supply};
    mapping(address => uint256) balances;
    mapping(address => mapping(address => uint256)) allowances;
  }}

  constructor() {{
    balances[msg.sender] = totalSupply;
  }}

  function balanceOf(address account) public view returns (uint256) {{
    return balances[account];
  }}

  function transfer(address to, uint256 amount) public returns (bool) {{
    require(balances[msg.sender] >= amount, "Insufficient balance");
    balances[msg.sender] -= amount;
    balances[to] += amount;
    emit Transfer(msg.sender, to, amount);
    return true;
  }}

  function approve(address spender, uint256 amount) public returns (bool) {{
    allowances[msg.sender][spender] = amount;
    emit Approval(msg.sender, spender, amount);
    return true;
  }}

  function transferFrom(address from, address to, uint256 amount) public returns (bool) {{
    require(balances[from] >= amount, "Insufficient balance");
    require(allowances[from][msg.sender] >= amount, "Insufficient allowance");
    balances[from] -= amount;
    balances[to] += amount;
    allowances[from][msg.sender] -= amount;
    emit Transfer(from, to, amount);
    return true;
  }}

  event Transfer(address indexed from, address indexed to, uint256 value);
  event Approval(address indexed owner, address indexed spender, uint256 value);
}}
"""

_NFT_TEMPLATE = """\
contract NFT {{
  state {{
    string name = "{name}";
    string symbol = "{symbol}";
    uint256 nextTokenId = 1;
    mapping(uint256 => address) owners;
    mapping(uint256 => string) tokenURIs;
    mapping(address => uint256) balances;
  }}

  function mint(address to, string memory uri) public returns (uint256) {{
    uint256 tokenId = nextTokenId++;
    owners[tokenId] = to;
    tokenURIs[tokenId] = uri;
    balances[to]++;
    emit Mint(to, tokenId, uri);
    return tokenId;
  }}

  function ownerOf(uint256 tokenId) public view returns (address) {{
    return owners[tokenId];
  }}

  function tokenURI(uint256 tokenId) public view returns (string memory) {{
    return tokenURIs[tokenId];
  }}

  function balanceOf(address owner) public view returns (uint256) {{
    return balances[owner];
  }}

  event Mint(address indexed to, uint256 indexed tokenId, string uri);
}}
"""


def _literal(field: str, value: str) -> str:
    """Validate text destined for a double-quoted AGXCL string literal."""
    if not value:
        raise ValueError(f"{field} must not be empty")
    if any(c in value for c in ('"', "\\", "\n", "\r")):
        raise ValueError(f"{field} must not contain quotes, backslashes or newlines: {value!r}")
    return value


def token_source(name: str, symbol: str, total_supply: str | int) -> str:
    """Render the fungible token contract."""
    supply = str(total_supply).strip()
    if not _UINT_RE.match(supply):
        raise ValueError(f"total_supply must be a non-negative integer, got {total_supply!r}")
    return _TOKEN_TEMPLATE.format(
        name=_literal("name", name),
        symbol=_literal("symbol", symbol),
        total_supply=supply,
    )


def nft_source(name: str, symbol: str) -> str:
    """Render the NFT contract."""
    return _NFT_TEMPLATE.format(
        name=_literal("name", name),
        symbol=_literal("symbol", symbol),
    )
