from __future__ import annotations
import argparse
import logging
from dispatch_advisor.cmd.pipeline import pipeline


def logging_conf(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dispatch-advisor",
        description="Recommend the initial deployment for classified incidents.",
    )
    p.add_argument("incidents", help="JSON file with the incidents to recommend for")
    p.add_argument("--rules", help="rule set file or URL (default: $DISPATCH_RULE_SET)")
    p.add_argument("--extended", action="store_true", help="append scale-up options to the rationale")
    p.add_argument("--excel", action="store_true", help="also write an Excel report")
    p.add_argument("-v", "--verbose", action="store_true", help="log matcher decisions")
    return p

def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging_conf(args.verbose)
    pipeline(
        args.incidents,
        rules_source=args.rules,
        extended=args.extended,
        excel_report=args.excel,
    )

if __name__ == "__main__":
    main()
