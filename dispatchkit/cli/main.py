"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing to the strategy dispatchers
- Output formatting
"""
import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from dispatchkit import __version__
from dispatchkit.cli.formatters import format_output
from dispatchkit.domain.base.exceptions import DomainException
from dispatchkit.infrastructure.logging.logger import get_logger

# CLI resource -> strategy family
RESOURCE_FAMILIES = {
    "payments": "payment",
    "bonuses": "bonus",
    "notifications": "notification",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the resource-action structure."""

    # Main parser with global options
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]) or "dispatchkit",
        description="dispatchkit - pluggable strategy dispatch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s payments list                       # List payment methods
  %(prog)s payments process upi 100            # Pay Rs.100 via UPI
  %(prog)s bonuses calculate developer 50000   # Developer bonus
  %(prog)s notifications send sms "Disk full"  # Send an SMS alert
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file path (JSON or YAML)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Override the configured logging level')
    parser.add_argument('--format', choices=['json', 'yaml', 'table'],
                        default='json', help='Output format')
    parser.add_argument('--quiet', action='store_true', help='Suppress error details')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    # Resource subparsers
    subparsers = parser.add_subparsers(dest='resource', help='Available resources')

    # Payments resource
    payments_parser = subparsers.add_parser('payments', help='Process payments')
    payments_subparsers = payments_parser.add_subparsers(dest='action', help='Payment actions')
    payments_subparsers.add_parser('list', help='List payment methods')
    payments_process = payments_subparsers.add_parser('process', help='Process a payment')
    payments_process.add_argument('key', help='Payment method (e.g. upi, card)')
    payments_process.add_argument('amount', help='Amount to pay')
    payments_process.add_argument('--currency', help='Currency code, configured default when omitted')
    payments_process.add_argument('--reference', help='Caller reference for the payment')

    # Bonuses resource
    bonuses_parser = subparsers.add_parser('bonuses', help='Calculate bonuses')
    bonuses_subparsers = bonuses_parser.add_subparsers(dest='action', help='Bonus actions')
    bonuses_subparsers.add_parser('list', help='List employee roles')
    bonuses_calculate = bonuses_subparsers.add_parser('calculate', help='Calculate a bonus')
    bonuses_calculate.add_argument('key', help='Employee role (e.g. developer, manager)')
    bonuses_calculate.add_argument('salary', help='Salary the bonus is based on')

    # Notifications resource
    notifications_parser = subparsers.add_parser('notifications', help='Send notifications')
    notifications_subparsers = notifications_parser.add_subparsers(dest='action', help='Notification actions')
    notifications_subparsers.add_parser('list', help='List notification channels')
    notifications_send = notifications_subparsers.add_parser('send', help='Send a notification')
    notifications_send.add_argument('key', help='Channel (e.g. email, sms)')
    notifications_send.add_argument('message', help='Message text')
    notifications_send.add_argument('--recipient', help='Destination address or number')

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def build_payload(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate parsed arguments into a strategy payload."""
    if args.resource == 'payments':
        payload = {'amount': args.amount}
        if args.currency:
            payload['currency'] = args.currency
        if args.reference:
            payload['reference'] = args.reference
        return payload
    if args.resource == 'bonuses':
        return {'salary': args.salary}
    payload = {'message': args.message}
    if args.recipient:
        payload['recipient'] = args.recipient
    return payload


def execute_command(args: argparse.Namespace, app) -> Dict[str, Any]:
    """Route a parsed command to the matching dispatcher."""
    family = RESOURCE_FAMILIES[args.resource]
    dispatcher = app.get_dispatcher(family)

    if args.action == 'list':
        return {
            'family': family,
            'strategies': [str(key) for key in dispatcher.available_keys()],
        }

    result = dispatcher.process(args.key, build_payload(args))
    return result.model_dump(mode='json')


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    logger = get_logger(__name__)

    # Validate required arguments
    if not args.resource:
        print("Error: No resource specified. Use --help for usage information.")
        return 1

    if not args.action:
        print(f"Error: No action specified for {args.resource}. Use --help for usage information.")
        return 1

    try:
        # Initialize application
        from dispatchkit.bootstrap import create_application
        from dispatchkit.config.manager import get_config_manager

        if args.log_level:
            get_config_manager(args.config).set('logging.level', args.log_level)
        app = create_application(args.config)

        # Execute command
        result = execute_command(args, app)
        print(format_output(result, args.format))
        return 0

    except DomainException as e:
        logger.error("Command failed", error=str(e))
        if not args.quiet:
            print(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
