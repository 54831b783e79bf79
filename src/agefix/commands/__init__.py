"""
Commands - CLI front ends for the AgeFix client.

- ledger: deploy, query, execute, receipt, balance, estimate-gas
- token:  fungible token helper commands
- nft:    NFT helper commands
"""
