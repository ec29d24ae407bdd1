#!/usr/bin/env python3
# PURPOSE: Command-line runner for the simulate pipeline.
# CONTEXT: Lets you try a decision locally without deploying the Lambda.
#          Reads a DecisionInput JSON document from a file (or stdin) and prints
#          the ComparisonOutput. --stub uses the offline StubModel.

import argparse, json, sys

from careersim.errors import CareerSimError
from careersim.logging_setup import configure_logging
from careersim.pipeline import run_pipeline


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Compare two career options.")
    parser.add_argument("input", nargs="?", help="path to a DecisionInput JSON file (default: stdin)")
    parser.add_argument("--stub", action="store_true", help="use the offline stub model instead of Bedrock")
    args = parser.parse_args(argv)

    configure_logging(stream=sys.stderr)

    try:
        if args.input:
            with open(args.input, "r", encoding="utf-8") as f:
                body = json.load(f)
        else:
            body = json.load(sys.stdin)
    except (OSError, json.JSONDecodeError) as e:
        print(json.dumps({"error": f"Could not read input: {e}"}, indent=2))
        return 2

    model = None
    if args.stub:
        from careersim.model_impl.stub_model import StubModel
        model = StubModel()

    try:
        out = run_pipeline(body, model=model)
    except CareerSimError as e:
        print(json.dumps({"error": str(e)}, indent=2))
        return 1

    # Pretty-print the comparison for easier reading in the terminal.
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
