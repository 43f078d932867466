import argparse
import logging
import os
import sys
import time

from .exceptions import SplaxError
from .parser.core.printer import print_ast
from .pipeline import run_front_end
from .utils import TerminalColors


def setup_logging(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def main(argv=None):
    start_time = time.perf_counter()

    # This provides a single source of truth for stage names and their order.
    STAGE_MAP = {
        "1": ("tokens", "Token Stream"),
        "2": ("ast", "Abstract Syntax Tree"),
    }

    # Dynamically generate help text for the --compile argument
    stage_help_text = "Run the front-end up to a specific stage and save the intermediate artifact. "
    for key, (name, desc) in STAGE_MAP.items():
        stage_help_text += f"'{key}' for {desc}. "
    stage_help_text += "Omitting this flag parses the whole script and only reports errors."

    parser = argparse.ArgumentParser(description="Tokenize and parse a Splax script.")
    parser.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="The path to the input .splax file. Omit to read from stdin.",
    )
    parser.add_argument("-c", "--compile", type=str, choices=STAGE_MAP.keys(), help=stage_help_text)
    parser.add_argument("--print-ast", action="store_true", help="Print every top-level statement in prefix notation.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every front-end step at DEBUG level.")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    # --- Input Validation ---
    if not args.input_file and sys.stdin.isatty():
        parser.error("input_file is required when not reading from a pipe.")

    script_path_for_display = args.input_file or "stdin"
    print(f"--- Parsing {script_path_for_display} ---")

    try:
        # --- Read Input ---
        if not args.input_file:
            script_content = sys.stdin.read()
            input_file_path_abs = None
        else:
            input_file_path_abs = os.path.abspath(args.input_file)
            with open(input_file_path_abs, "r", encoding="utf-8") as f:
                script_content = f.read()

        # --- Determine Pipeline Stop Point ---
        stop_after_stage = None
        stage_desc = None
        if args.compile:
            stop_after_stage, stage_desc = STAGE_MAP[args.compile]

        # The pipeline saves the artifact of the stage it stops at
        dump_stages = [stop_after_stage] if stop_after_stage else []

        # --- Run Front-End ---
        final_product = run_front_end(
            script_content,
            file_path=input_file_path_abs,
            dump_stages=dump_stages,
            stop_after_stage=stop_after_stage,
        )

        # --- Handle Output ---
        if args.print_ast and stop_after_stage != "tokens":
            print(print_ast(final_product))

        if stop_after_stage:
            print(f"\n{TerminalColors.GREEN}--- Stage '{args.compile} ({stage_desc})' successful ---{TerminalColors.RESET}")
        else:
            print(f"\n{TerminalColors.GREEN}--- Parsing Successful ---{TerminalColors.RESET}")

    # --- Error Handling ---
    except SplaxError as e:
        print(
            f"\n{TerminalColors.RED}--- FRONT-END ERROR ---\n{e}{TerminalColors.RESET}",
            file=sys.stderr,
        )
        sys.exit(1)
    except FileNotFoundError:
        print(
            f"{TerminalColors.RED}ERROR: Script file '{script_path_for_display}' not found.{TerminalColors.RESET}",
            file=sys.stderr,
        )
        sys.exit(1)
    except Exception as e:
        print(
            f"\n{TerminalColors.RED}--- UNEXPECTED FRONT-END ERROR ---{TerminalColors.RESET}",
            file=sys.stderr,
        )
        print("This may be a bug in the front-end. Please report it.", file=sys.stderr)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)

    finally:
        # --- Execution Time ---
        end_time = time.perf_counter()
        duration = end_time - start_time
        print(f"\n{TerminalColors.CYAN}--- Total Execution Time: {duration:.4f} seconds ---{TerminalColors.RESET}")


if __name__ == "__main__":
    main()
