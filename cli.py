#!/usr/bin/env python3
"""
Main CLI for the sugar market analytics workbench.
Usage:
  python cli.py analyze [options]
  python cli.py import-cost --ice-price P --usd-cny R --bdi B [options]
"""

import sys
import json
import logging
import argparse
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from analysis.analysis_job import MarketAnalysisConfig, run_market_analysis
from analysis.calculations.import_cost import (
    PREFERENTIAL_TARIFF_RATE,
    STANDARD_TARIFF_RATE,
    quote_import_costs
)
from reports.formatters import (
    format_change,
    format_cny_per_ton,
    format_coefficient,
    format_date_display,
    format_metric_value,
    format_ratio
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with analyze and import-cost commands."""
    parser = argparse.ArgumentParser(
        description='Sugar market analytics: arbitrage window, correlations, import cost',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py analyze
  python cli.py analyze --limit 60 --output ./data/dashboard.json
  python cli.py import-cost --ice-price 18 --usd-cny 7.1 --bdi 1200
  python cli.py import-cost --ice-price 18 --usd-cny 7.1 --bdi 1200 --tariff-rate 0.5
        """
    )
    parser.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Enable INFO logging')

    subparsers = parser.add_subparsers(dest='command')

    analyze = subparsers.add_parser('analyze', help='Fetch market data and compose dashboard metrics')
    analyze.add_argument('--limit',
                         type=int,
                         help='Days of history to fetch (default: MARKET_HISTORY_LIMIT or 30)')
    analyze.add_argument('--base-url',
                         help='Market API base URL (default: MARKET_API_BASE_URL)')
    analyze.add_argument('--output',
                         help='Output JSON file path (default: ./data/processed/dashboard/latest.json)')
    analyze.add_argument('--as-of',
                         type=date.fromisoformat,
                         default=date.today(),
                         help='Analysis date (YYYY-MM-DD, default: today)')
    analyze.add_argument('--quiet', '-q',
                         action='store_true',
                         help='Minimal output (just success/failure)')

    quote = subparsers.add_parser('import-cost', help='Estimate raw sugar import cost')
    quote.add_argument('--ice-price', type=float, required=True,
                       help='ICE No.11 raw sugar price (US cents/lb)')
    quote.add_argument('--usd-cny', type=float, required=True,
                       help='USD/CNY exchange rate')
    quote.add_argument('--bdi', type=float, required=True,
                       help='Baltic Dry Index')
    quote.add_argument('--tariff-rate', type=float, action='append',
                       help='Tariff rate as decimal; repeatable '
                            f'(default: {PREFERENTIAL_TARIFF_RATE} and {STANDARD_TARIFF_RATE})')

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if args.command == 'analyze':
        return run_analyze(args)
    elif args.command == 'import-cost':
        return run_import_cost(args)

    parser.print_help()
    return 1


def run_analyze(args: argparse.Namespace) -> int:
    """Run the analysis job and print a summary."""
    try:
        config = MarketAnalysisConfig(
            history_limit=args.limit,
            output_path=args.output,
            as_of_date=args.as_of,
            base_url=args.base_url
        )
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Analyzing sugar market ({config.history_limit} days)")
        print(f"Analysis date: {config.as_of_date}")
        print()

    result = run_market_analysis(config)

    if result['status'] != 'completed':
        print(f"ERROR: Analysis failed: {result['error_message']}", file=sys.stderr)
        return 1

    if args.quiet:
        print(f"Analysis complete: {result['output_path']}")
        return 0

    print("Analysis completed successfully")
    print(f"Rows fetched: {result['rows_fetched']}")
    print(f"Observations used: {result['observations_used']}")
    if result['validation_warnings']:
        print(f"WARNING: {result['validation_warnings']} rows dropped by validation")
    print(f"Duration: {result['duration_seconds']:.1f}s")
    print(f"Results saved to: {result['output_path']}")
    print()

    _show_quick_summary(result['output_path'])
    return 0


def run_import_cost(args: argparse.Namespace) -> int:
    """Print the import cost breakdown for each tariff rate."""
    print(f"ICE {args.ice_price:.2f} c/lb, USD/CNY {args.usd_cny:.4f}, BDI {args.bdi:,.0f}")
    print()

    quotes = quote_import_costs(args.ice_price, args.usd_cny, args.bdi, args.tariff_rate)

    for breakdown in quotes:
        print(f"Tariff {format_ratio(breakdown['tariff_rate'] * 100, 0)}:")
        print(f"   Base price: {format_cny_per_ton(breakdown['base_price'])}")
        print(f"   Tariff:     {format_cny_per_ton(breakdown['tariff'])}")
        print(f"   Freight:    {format_cny_per_ton(breakdown['freight'])}")
        print(f"   Total:      {format_cny_per_ton(breakdown['total'])}")

    return 0


def _show_quick_summary(output_path: str) -> None:
    """Show quick summary of the dashboard metrics."""
    with open(output_path, 'r') as f:
        dashboard = json.load(f)

    latest_date = dashboard['latest']['record_date']
    print(f"Quick Summary for {format_date_display(latest_date)}:")

    for card in dashboard['metric_cards']:
        value = format_metric_value(card['value'], card['decimals'], card['suffix'])
        change = format_change(card['change'])
        print(f"   {card['title']}: {value} ({change})")

    arbitrage = dashboard['arbitrage']
    latest = arbitrage['latest']
    distribution = arbitrage['distribution']
    print(f"   Arbitrage: {latest['label']} ({format_cny_per_ton(latest['profit'])})")
    print(f"   Profitable days: {distribution['profitable_days']} of "
          f"{distribution['profitable_days'] + distribution['loss_days']} "
          f"({format_ratio(distribution['profitable_ratio'])})")

    for name, correlation in dashboard['correlations'].items():
        print(f"   {name}: r={format_coefficient(correlation['coefficient'])} "
              f"({correlation['description']})")

    regression = dashboard['regression']
    print(f"   Regression R²: {format_coefficient(regression['r_squared'])}")
    print()


if __name__ == '__main__':
    sys.exit(main())
