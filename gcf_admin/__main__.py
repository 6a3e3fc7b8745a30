#!/usr/bin/env python3
"""Command-line entry point for gcf-admin."""
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .cli_parser import CLIParser, ParsedCLIArguments
from .errors import FunctionsClientError
from .functions_client import FunctionsClient
from .gcf_models import CloudFunction
from .gcf_task_primitives import DeleteFunctionTask, DeployFunctionTask
from .logging_config import configure_logger


def run_command(args: ParsedCLIArguments, client: FunctionsClient, logger: logging.Logger):
    """Run the selected subcommand and return a JSON-serializable result."""
    if args.command == 'regions':
        return client.list_regions(args.project)

    if args.command == 'upload-url':
        return {'uploadUrl': client.generate_upload_url(args.project, args.region)}

    if args.command == 'describe':
        return client.get_function(args.project, args.region, args.name)

    if args.command == 'delete':
        task = DeleteFunctionTask(client, args.project, args.region, args.name, logger=logger)
        return task.execute(timeout=args.delete_timeout).to_dict()

    if args.command == 'deploy':
        function = CloudFunction(
            name=args.name,
            region=args.region,
            runtime=args.runtime,
            entry_point=args.entry_point,
            memory_mb=args.memory_mb,
            timeout_seconds=args.timeout,
            max_instances=args.max_instances,
            env_vars=args.env_vars,
            labels=args.labels,
        )
        task = DeployFunctionTask(client, args.project, function,
                                  deployment_timeout_seconds=args.deployment_timeout,
                                  source_dir=Path(args.source_dir),
                                  logger=logger)
        return task.execute().to_dict()

    raise ValueError(f"unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = CLIParser(prog='gcf-admin', description='Manage Google Cloud Functions.').parse(argv)

    # stdout is reserved for the JSON result
    logger = configure_logger(logging.getLogger('gcf_admin'), log_file=args.log_file,
                              level=logging.DEBUG if args.verbose else logging.INFO,
                              info_stream=sys.stderr)
    if args.verbose:
        args.print_configuration(logger, table_header="gcf-admin configuration")

    client = FunctionsClient(user_agent=args.user_agent, logger=logger)
    try:
        result = run_command(args, client, logger)
    except FunctionsClientError as e:
        logger.error(str(e))
        return 1

    print(json.dumps(result, indent=2))
    if isinstance(result, dict) and result.get('success') is False:
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
