import argparse
from pathlib import Path
from typing import List, Optional

from . import audit
from .errors import TokenError
from .storage import load_token, transaction
from .utils import normalize_principal


def _caller(args: argparse.Namespace) -> str:
    if not args.caller:
        raise SystemExit("Caller required; pass --as <principal>")
    return normalize_principal(args.caller)


def _state_path(args: argparse.Namespace) -> Optional[Path]:
    return Path(args.state) if args.state else None


def _run(args: argparse.Namespace, action) -> str:
    caller = _caller(args)
    with transaction(_state_path(args), listeners=[audit.listener(caller)]) as token:
        action(token, caller)
    return caller


def handle_init(args: argparse.Namespace) -> None:
    caller = _run(args, lambda token, caller: token.initialize(caller, args.name, args.symbol))
    print(f"Initialized {args.name} ({args.symbol}); governance: {caller}")


def handle_propose(args: argparse.Namespace) -> None:
    candidate = None if args.clear else normalize_principal(args.candidate)
    if candidate is None and not args.clear:
        raise SystemExit("Pass a candidate or --clear")
    _run(args, lambda token, caller: token.propose_governance(caller, candidate))
    if candidate is None:
        print("Pending governance cleared")
    else:
        print(f"Proposed governance: {candidate}")


def handle_accept(args: argparse.Namespace) -> None:
    caller = _run(args, lambda token, caller: token.accept_governance(caller))
    print(f"Governance accepted by {caller}")


def handle_set_minter(args: argparse.Namespace) -> None:
    user = normalize_principal(args.user)
    allowed = not args.revoke
    _run(args, lambda token, caller: token.set_minter(caller, user, allowed))
    print(f"Minter {user}: {'granted' if allowed else 'revoked'}")


def handle_mint(args: argparse.Namespace) -> None:
    user = normalize_principal(args.user)
    _run(args, lambda token, caller: token.mint(caller, user, args.amount))
    print(f"Minted {args.amount} to {user}")


def handle_burn(args: argparse.Namespace) -> None:
    caller = _run(args, lambda token, caller: token.burn(caller, args.amount))
    print(f"Burned {args.amount} from {caller}")


def handle_burn_from(args: argparse.Namespace) -> None:
    account = normalize_principal(args.account)
    _run(args, lambda token, caller: token.burn_from(caller, account, args.amount))
    print(f"Burned {args.amount} from {account}")


def handle_transfer(args: argparse.Namespace) -> None:
    recipient = normalize_principal(args.recipient)
    _run(args, lambda token, caller: token.transfer(caller, recipient, args.amount))
    print(f"Transferred {args.amount} to {recipient}")


def handle_approve(args: argparse.Namespace) -> None:
    spender = normalize_principal(args.spender)
    _run(args, lambda token, caller: token.approve(caller, spender, args.amount))
    print(f"Approved {spender} for {args.amount}")


def handle_transfer_from(args: argparse.Namespace) -> None:
    owner = normalize_principal(args.owner)
    recipient = normalize_principal(args.recipient)
    _run(args, lambda token, caller: token.transfer_from(caller, owner, recipient, args.amount))
    print(f"Transferred {args.amount} from {owner} to {recipient}")


def handle_balance(args: argparse.Namespace) -> None:
    token = load_token(_state_path(args))
    account = normalize_principal(args.account)
    print(f"{account}: {token.balance_of(account)}")


def handle_allowance(args: argparse.Namespace) -> None:
    token = load_token(_state_path(args))
    owner = normalize_principal(args.owner)
    spender = normalize_principal(args.spender)
    print(f"{owner} -> {spender}: {token.allowance(owner, spender)}")


def handle_show(args: argparse.Namespace) -> None:
    token = load_token(_state_path(args))
    if not token.initialized:
        print("Token not initialized.")
        return
    print(f"name: {token.name}")
    print(f"symbol: {token.symbol}")
    print(f"decimals: {token.decimals}")
    print(f"total_supply: {token.total_supply}")
    print(f"governance: {token.governance_principal}")
    print(f"pending_governance: {token.pending_governance or '(none)'}")
    print(f"minters: {', '.join(token.minters.minters()) or '(none)'}")


def handle_audit(args: argparse.Namespace) -> None:
    from .db import list_events

    events = list_events(limit=args.limit)
    if not events:
        print("No audit events.")
        return
    for ev in events:
        print(f"{ev['timestamp']} {ev['event']} caller={ev['caller']} data={ev['data']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Governed mintable token CLI")
    parser.add_argument("--as", dest="caller", help="Principal performing the call")
    parser.add_argument("--state", help="Path to the token state file (YAML)")
    sub = parser.add_subparsers(dest="command")

    init = sub.add_parser("init", help="Initialize the token; the caller becomes governance")
    init.add_argument("name")
    init.add_argument("symbol")
    init.set_defaults(func=handle_init)

    propose = sub.add_parser("propose", help="Propose a governance successor")
    propose.add_argument("candidate", nargs="?")
    propose.add_argument("--clear", action="store_true", help="Withdraw the pending proposal")
    propose.set_defaults(func=handle_propose)

    accept = sub.add_parser("accept", help="Accept a pending governance proposal")
    accept.set_defaults(func=handle_accept)

    set_minter = sub.add_parser("set-minter", help="Grant or revoke minter rights")
    set_minter.add_argument("user")
    set_minter.add_argument("--revoke", action="store_true", help="Revoke instead of grant")
    set_minter.set_defaults(func=handle_set_minter)

    mint = sub.add_parser("mint", help="Mint new supply to an account")
    mint.add_argument("user")
    mint.add_argument("amount", type=int)
    mint.set_defaults(func=handle_mint)

    burn = sub.add_parser("burn", help="Burn the caller's own balance")
    burn.add_argument("amount", type=int)
    burn.set_defaults(func=handle_burn)

    burn_from = sub.add_parser("burn-from", help="Burn from an account using its allowance")
    burn_from.add_argument("account")
    burn_from.add_argument("amount", type=int)
    burn_from.set_defaults(func=handle_burn_from)

    transfer = sub.add_parser("transfer", help="Transfer the caller's balance")
    transfer.add_argument("recipient")
    transfer.add_argument("amount", type=int)
    transfer.set_defaults(func=handle_transfer)

    approve = sub.add_parser("approve", help="Set a spender's allowance")
    approve.add_argument("spender")
    approve.add_argument("amount", type=int)
    approve.set_defaults(func=handle_approve)

    transfer_from = sub.add_parser("transfer-from", help="Transfer using an allowance")
    transfer_from.add_argument("owner")
    transfer_from.add_argument("recipient")
    transfer_from.add_argument("amount", type=int)
    transfer_from.set_defaults(func=handle_transfer_from)

    balance = sub.add_parser("balance", help="Show an account balance")
    balance.add_argument("account")
    balance.set_defaults(func=handle_balance)

    allowance = sub.add_parser("allowance", help="Show an allowance")
    allowance.add_argument("owner")
    allowance.add_argument("spender")
    allowance.set_defaults(func=handle_allowance)

    show_cmd = sub.add_parser("show", help="Show token metadata and authority")
    show_cmd.set_defaults(func=handle_show)

    audit_cmd = sub.add_parser("audit", help="Show recent audit events")
    audit_cmd.add_argument("--limit", type=int, default=50, help="Number of events to show")
    audit_cmd.set_defaults(func=handle_audit)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    try:
        args.func(args)
    except TokenError as exc:
        raise SystemExit(f"{type(exc).__name__}: {exc}")


if __name__ == "__main__":
    main()
