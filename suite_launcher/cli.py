"""CLI entry point for the suite launcher."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from suite_launcher.environments.loading import YamlEnvironmentConfigResolver
from suite_launcher.errors import SetupError
from suite_launcher.executors.loading import (
    available_executors,
    load_executor_manifest,
)
from suite_launcher.orchestrator import SuiteOrchestrator
from suite_launcher.reporting import format_output, log_summary
from suite_launcher.suites.loading import YamlSuiteResolver

SETUP_ERROR_EXIT_CODE = 2


async def run(
    suite_name: str,
    config_name: str,
    suites_dir: Path,
    configs_dir: Path,
    executor_key: str,
    executor_config_json: str,
    test_jar: Path,
    reports_dir: Path,
) -> int:
    """Run a suite and return exit code.

    Raises:
        SetupError: If the executor, the suite or the environment config
            cannot be set up

    """
    log = logging.getLogger("suite_launcher")

    log.info("Loading executor: %s", executor_key)
    manifest = load_executor_manifest(executor_key)

    config = manifest.parse_config(executor_config_json)

    async with manifest.executor_factory(config) as executor:
        orchestrator = SuiteOrchestrator(
            suite_resolver=YamlSuiteResolver(suites_dir=suites_dir),
            config_resolver=YamlEnvironmentConfigResolver(configs_dir=configs_dir),
            executor=executor,
            test_jar=test_jar,
            reports_root=reports_dir,
        )
        execution = await orchestrator.execute(suite_name, config_name)

    log_summary(log, execution)

    output = format_output(execution)
    print(json.dumps(output, indent=2))

    return execution.exit_status


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Run suite tests")
    parser.add_argument(
        "--suite",
        required=True,
        help="Name of the suite to run",
    )
    parser.add_argument(
        "--config",
        default="config-default",
        help="Name of the environment config (default: %(default)s)",
    )
    parser.add_argument(
        "--suites-dir",
        type=Path,
        default=Path("suites"),
        help="Directory holding <suite>.yaml files (default: %(default)s)",
    )
    parser.add_argument(
        "--configs-dir",
        type=Path,
        default=Path("configs"),
        help="Directory holding <config>.yaml files (default: %(default)s)",
    )
    parser.add_argument(
        "--executor",
        default="command",
        help=f"One of {available_executors()} (default: %(default)s)",
    )
    parser.add_argument(
        "--executor-config",
        default="{}",
        help="JSON configuration for the executor",
    )
    parser.add_argument(
        "--test-jar",
        type=Path,
        default=Path("presto-product-tests/target/presto-product-tests-executable.jar"),
        help="Path to test JAR (default: %(default)s)",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path("presto-product-tests/target"),
        help="Root directory for test run reports (default: %(default)s)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        exit_code = asyncio.run(
            run(
                suite_name=args.suite,
                config_name=args.config,
                suites_dir=args.suites_dir,
                configs_dir=args.configs_dir,
                executor_key=args.executor,
                executor_config_json=args.executor_config,
                test_jar=args.test_jar,
                reports_dir=args.reports_dir,
            )
        )
    except SetupError as e:
        logging.getLogger("suite_launcher").error("Suite setup failed: %s", e)
        sys.exit(SETUP_ERROR_EXIT_CODE)

    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
