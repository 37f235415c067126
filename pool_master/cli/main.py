"""Main CLI entry point"""

import sys
import logging
import argparse

from ..core.config import Config
from ..core.connection import Web3Manager
from ..core.exceptions import PoolMasterError
from ..operations.invoker import OperationInvoker, WriteResult
from ..operations.roles import OPERATION_ROLES
from ..operations.sequence import DEFAULT_SEQUENCE, load_sequence, run_sequence


def get_invoker(args):
    """Connection, identities and invoker from the environment"""
    manager = Web3Manager.from_env()
    return OperationInvoker(manager, receipt_timeout=args.timeout)


def print_result(result):
    """Print a tagged result; returns True for Ok"""
    if not result.ok:
        print(f"  FAILED [{result.kind.value}]: {result.detail}")
        return False

    value = result.value
    if isinstance(value, WriteResult):
        receipt = value.receipt
        print(f"  Hash:     {value.tx_hash}")
        print(f"  Block:    {receipt.get('blockNumber')}")
        print(f"  Gas used: {receipt.get('gasUsed')}")
        print(f"  Status:   {value.state.value}")
    for key, val in value.named.items():
        print(f"  {key}: {val}")
    return True


def cmd_functions(args):
    """List the contract functions and which identity signs them"""
    descriptor = Config().descriptor()
    print(f"Contract: {descriptor.address}")
    print("-" * 60)
    for function in descriptor:
        role = OPERATION_ROLES.get(function.name)
        signer = role.value if role else "-"
        print(f"  [{signer:>5}] {function.describe()}")
    return True


def cmd_status(args):
    """Check node connectivity and show identity addresses"""
    manager = Web3Manager.from_env()
    manager.check_connection()
    node_chain = manager.node_chain_id()
    print(f"Node chain ID:       {node_chain}")
    print(f"Configured chain ID: {manager.chain_id}")
    print(f"Admin:               {manager.admin.address}")
    print(f"User:                {manager.user.address}")
    if node_chain != manager.chain_id:
        print("WARNING: node chain differs from configured chain; writes will be rejected")
        return False
    return True


def cmd_info(args):
    return print_result(get_invoker(args).get_dynamic_info(args.token_id))


def cmd_swap(args):
    invoker = get_invoker(args)
    return print_result(
        invoker.swap_exact_input_single(args.amount_in, args.min_out, args.zero_for_one, value=args.value)
    )


def cmd_collect_fees(args):
    return print_result(get_invoker(args).collect_pool_all_fees())


def cmd_mint(args):
    invoker = get_invoker(args)
    return print_result(
        invoker.mint_position(args.tick_lower, args.tick_upper, args.amount0_max, args.amount1_max)
    )


def cmd_burn(args):
    invoker = get_invoker(args)
    return print_result(invoker.burn_position(args.token_id, args.amount0_min, args.amount1_min))


def cmd_increase(args):
    invoker = get_invoker(args)
    return print_result(invoker.increase_liquidity(args.token_id, args.amount0_max, args.amount1_max))


def cmd_decrease(args):
    invoker = get_invoker(args)
    return print_result(
        invoker.decrease_liquidity(args.token_id, args.liquidity, args.amount0_min, args.amount1_min)
    )


def cmd_run(args):
    """Run a sequence file (or the default sequence) in order"""
    steps = load_sequence(args.sequence) if args.sequence else list(DEFAULT_SEQUENCE)
    invoker = get_invoker(args)
    results = run_sequence(invoker, steps, stop_on_error=args.stop_on_error)

    ok = True
    print("=" * 60)
    for index, (step, result) in enumerate(results, 1):
        print(f"{index}. {step.describe()}")
        ok = print_result(result) and ok
    skipped = len(steps) - len(results)
    if skipped:
        print(f"\n{skipped} step(s) skipped")
    return ok and not skipped


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pool-master",
        description="Invoke pool master contract functions as admin or user",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""environment:
  ARBITRUM_SEPOLIA_RPC_URL, ADMIN_PRIVATE_KEY, USER_PRIVATE_KEY (read from .env)

examples:
  pool-master info 2107
  pool-master swap 100000000000000000 --zero-for-one
  pool-master mint 31920 39060 5000000000000000000000 5000000000000000000000
  pool-master run config/maintenance.json --stop-on-error
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Seconds to wait for each receipt (default: POOL_MASTER_RECEIPT_TIMEOUT or 120)")
    subparsers = parser.add_subparsers(dest="command")

    functions_parser = subparsers.add_parser("functions", help="List contract functions and signer roles")
    functions_parser.set_defaults(func=cmd_functions)

    status_parser = subparsers.add_parser("status", help="Check node connection and identities")
    status_parser.set_defaults(func=cmd_status)

    info_parser = subparsers.add_parser("info", help="Read price, tick and amounts for a position")
    info_parser.add_argument("token_id", type=int, help="Position token ID")
    info_parser.set_defaults(func=cmd_info)

    swap_parser = subparsers.add_parser("swap", help="Swap exact input (user)")
    swap_parser.add_argument("amount_in", type=int, help="Input amount in base units")
    swap_parser.add_argument("--min-out", type=int, default=0, help="Minimum output in base units")
    direction = swap_parser.add_mutually_exclusive_group(required=True)
    direction.add_argument("--zero-for-one", dest="zero_for_one", action="store_true", help="token0 -> token1")
    direction.add_argument("--one-for-zero", dest="zero_for_one", action="store_false", help="token1 -> token0")
    swap_parser.add_argument("--value", type=int, default=0, help="Wei to attach (payable)")
    swap_parser.set_defaults(func=cmd_swap)

    collect_parser = subparsers.add_parser("collect-fees", help="Collect all pool fees (user)")
    collect_parser.set_defaults(func=cmd_collect_fees)

    mint_parser = subparsers.add_parser("mint", help="Mint a new position (admin)")
    mint_parser.add_argument("tick_lower", type=int, help="Lower tick")
    mint_parser.add_argument("tick_upper", type=int, help="Upper tick")
    mint_parser.add_argument("amount0_max", type=int, help="Maximum token0 in base units")
    mint_parser.add_argument("amount1_max", type=int, help="Maximum token1 in base units")
    mint_parser.set_defaults(func=cmd_mint)

    burn_parser = subparsers.add_parser("burn", help="Burn a position (admin)")
    burn_parser.add_argument("token_id", type=int, help="Position token ID")
    burn_parser.add_argument("--amount0-min", type=int, default=0, help="Minimum token0 out")
    burn_parser.add_argument("--amount1-min", type=int, default=0, help="Minimum token1 out")
    burn_parser.set_defaults(func=cmd_burn)

    increase_parser = subparsers.add_parser("increase", help="Increase position liquidity (admin)")
    increase_parser.add_argument("token_id", type=int, help="Position token ID")
    increase_parser.add_argument("amount0_max", type=int, help="Maximum token0 in base units")
    increase_parser.add_argument("amount1_max", type=int, help="Maximum token1 in base units")
    increase_parser.set_defaults(func=cmd_increase)

    decrease_parser = subparsers.add_parser("decrease", help="Decrease position liquidity (admin)")
    decrease_parser.add_argument("token_id", type=int, help="Position token ID")
    decrease_parser.add_argument("liquidity", type=int, help="Liquidity to remove")
    decrease_parser.add_argument("--amount0-min", type=int, default=0, help="Minimum token0 out")
    decrease_parser.add_argument("--amount1-min", type=int, default=0, help="Minimum token1 out")
    decrease_parser.set_defaults(func=cmd_decrease)

    run_parser = subparsers.add_parser("run", help="Run a sequence of operations in order")
    run_parser.add_argument("sequence", nargs="?", help="JSON sequence file (default: replace position 2107)")
    run_parser.add_argument("--stop-on-error", action="store_true", help="Skip remaining steps after a failure")
    run_parser.set_defaults(func=cmd_run)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        ok = args.func(args)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except PoolMasterError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        logging.getLogger(__name__).exception("Unexpected failure")
        print(f"Error: {e}")
        sys.exit(1)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
