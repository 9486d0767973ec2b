"""
CLI Sign Command

Sign an EIP-712 claim voucher with the configured signer key.

The key is read from --key or AIRDROP_SIGNER_KEY. The claimant defaults
to the signer's own address.

Usage:
    airdrop sign --token-contract 0x... --amount 100 --nonce 0
    airdrop sign --token-contract 0x... --token-id 7 --nonce 1 --claimant 0x...
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from pydantic import ValidationError

from core.crypto.signatures import SignatureFormatError
from offchain.signer import VoucherSigner


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def sign_cmd(args: Namespace) -> int:
    """
    Execute the sign command.

    Returns:
        Exit code
    """
    config = args.cli_config
    private_key = args.key or config.signer.private_key
    if not private_key:
        print("Error: No signing key. Pass --key or set AIRDROP_SIGNER_KEY.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    domain = config.domain.to_domain()
    try:
        signer = VoucherSigner(private_key, domain)
        signed = signer.sign_claim(
            asset_contract=args.token_contract,
            asset_id=args.token_id,
            amount=args.amount,
            nonce=args.nonce,
            claimant=args.claimant,
        )
    except (SignatureFormatError, ValidationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Signed voucher for {signed.voucher.claimant} on chain {domain.chain_id}")
    print(json.dumps(signed.to_json_dict(), indent=2))
    return EXIT_SUCCESS
