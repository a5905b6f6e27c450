"""
ScriptEngine - Main Entry Point
Plan prompts, generate scripts and validate existing scripts from the command line.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .agents import ScriptGenerationError, ScriptWriterAgent, create_llm_client
from .catalogs import CatalogError, load_catalogs
from .config import EngineSettings, create_default_config_from_env, create_settings_from_env
from .core import ScriptEngine, summary_report
from .models import EngineRequest, PresentingContext


# Load environment variables
load_dotenv()

logger = logging.getLogger("scriptengine")


def configure_logging(level: str) -> None:
    """Attach a single stream handler to the package logger."""
    if logger.handlers:
        logger.setLevel(level)
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)


def read_request(path: str, settings: EngineSettings) -> EngineRequest:
    """Read an EngineRequest from a JSON file ("-" for stdin)."""
    raw = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    data.setdefault("client_level", settings.default_client_level.value)
    return EngineRequest.model_validate(data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scriptengine",
        description="Plan, generate and validate hypnosis scripts",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Assemble prompts for a request")
    plan.add_argument("request", help="Path to a request JSON file, or - for stdin")
    plan.add_argument("--json", action="store_true", help="Print the full result as JSON")

    generate = subparsers.add_parser("generate", help="Generate a script for a request")
    generate.add_argument("request", help="Path to a request JSON file, or - for stdin")
    generate.add_argument("--no-polish", action="store_true", help="Skip the polish pass")
    generate.add_argument("--output", help="Write the script to this file")

    validate = subparsers.add_parser("validate", help="Validate an existing script")
    validate.add_argument("script", help="Path to a script text file")
    validate.add_argument("--word-count", type=int, default=None)

    recommend = subparsers.add_parser("recommend", help="Recommend templates")
    recommend.add_argument("issue", help="Presenting issue")
    recommend.add_argument("--outcome", default="")
    recommend.add_argument("--notes", default=None)
    recommend.add_argument("--limit", type=int, default=5)

    return parser


def cmd_plan(engine: ScriptEngine, request: EngineRequest, as_json: bool) -> int:
    result = engine.generate(request)
    if as_json:
        print(result.model_dump_json(indent=2))
        return 0

    print("\n".join(result.reasoning_log))
    print()
    print(result.system_prompt_text)
    print()
    print(result.user_prompt_text)
    return 0


async def cmd_generate(
    engine: ScriptEngine,
    settings: EngineSettings,
    request: EngineRequest,
    polish: bool,
    output: Optional[str],
) -> int:
    config = create_default_config_from_env()
    llm_client = create_llm_client(
        settings.generation_provider,
        config,
        settings.generation_model,
    )
    writer = ScriptWriterAgent(llm_client, engine, settings, polish=polish)

    try:
        generated = await writer.write(request)
    except ScriptGenerationError as e:
        logger.error(f"[generate] {e}")
        return 1

    if output:
        Path(output).write_text(generated.script, encoding="utf-8")
        print(f"Script written to {output}")
    else:
        print(generated.script)
    print()
    print(summary_report(generated.report))
    return 0 if generated.report.is_valid else 2


def cmd_validate(engine: ScriptEngine, script_path: str, word_count: Optional[int]) -> int:
    script = Path(script_path).read_text(encoding="utf-8")
    report = engine.validate(script, word_count)
    print(summary_report(report))
    return 0 if report.is_valid else 2


def cmd_recommend(
    engine: ScriptEngine,
    issue: str,
    outcome: str,
    notes: Optional[str],
    limit: int,
) -> int:
    context = PresentingContext(issue=issue, outcome=outcome, notes=notes)
    for rec in engine.recommend_templates(context)[:limit]:
        print(f"{rec.match_score:6.1f}  {rec.template.id}  ({rec.template.name})")
        for reason in rec.match_reasons:
            print(f"        - {reason}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    settings = create_settings_from_env()
    configure_logging(settings.log_level)

    try:
        catalogs = load_catalogs(settings.catalog_dir)
    except CatalogError as e:
        logger.error(f"[main] {e}")
        return 1
    engine = ScriptEngine(catalogs, settings)

    if args.command in ("plan", "generate"):
        try:
            request = read_request(args.request, settings)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"[main] Invalid request: {e}")
            return 1

        if args.command == "plan":
            return cmd_plan(engine, request, args.json)
        try:
            return asyncio.run(
                cmd_generate(engine, settings, request, not args.no_polish, args.output)
            )
        except ValueError as e:
            logger.error(f"[main] {e}")
            return 1

    if args.command == "validate":
        return cmd_validate(engine, args.script, args.word_count)

    return cmd_recommend(engine, args.issue, args.outcome, args.notes, args.limit)


if __name__ == "__main__":
    sys.exit(main())
