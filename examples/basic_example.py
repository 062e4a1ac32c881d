"""
Sponsor a SOL transfer through the Aethokit relay.

The sender signs the transfer; the relay's gas tank is set as fee payer and
countersigns before submitting.

Run:
    export AETHOKIT_GAS_KEY=...
    python examples/basic_example.py <recipient-pubkey>
"""

import asyncio
import base64
import os
import sys

from solana.rpc.async_api import AsyncClient
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from aethokit import Aethokit

RPC_URL = "https://api.devnet.solana.com"  # or mainnet: https://api.mainnet-beta.solana.com
LAMPORTS = 10_000_000  # 0.01 SOL


async def main(recipient: str) -> None:
    gas_key = os.environ.get("AETHOKIT_GAS_KEY")
    if not gas_key:
        raise SystemExit("set AETHOKIT_GAS_KEY in your environment")

    async with Aethokit(gas_key, "devnet") as aethokit_client, AsyncClient(RPC_URL) as rpc:
        sponsor_pubkey = Pubkey.from_string(await aethokit_client.get_gas_address())

        sender = Keypair()
        instruction = transfer(
            TransferParams(from_pubkey=sender.pubkey(), to_pubkey=Pubkey.from_string(recipient), lamports=LAMPORTS)
        )
        blockhash = (await rpc.get_latest_blockhash()).value.blockhash

        message = Message.new_with_blockhash([instruction], sponsor_pubkey, blockhash)
        tx = Transaction.new_unsigned(message)
        tx.partial_sign([sender], blockhash)

        serialized_tx = base64.b64encode(bytes(tx)).decode("ascii")
        tx_hash = await aethokit_client.sponsor_tx(serialized_tx)
        print(f"Hash: {tx_hash}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        raise SystemExit("usage: basic_example.py <recipient-pubkey>")
    asyncio.run(main(sys.argv[1]))
