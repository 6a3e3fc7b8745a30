import argparse
import copy
import logging
import os
from typing import Dict, List, Optional

from .discovery_clients import DEFAULT_USER_AGENT


def _key_value_pairs(value: str) -> Dict[str, str]:
    """Parse 'k1=v1,k2=v2' into a dict."""
    pairs = {}
    for item in value.split(','):
        item = item.strip()
        if not item:
            continue
        key, sep, val = item.partition('=')
        if not sep:
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{item}'")
        pairs[key.strip()] = val.strip()
    return pairs


class ParsedCLIArguments:
    """Read-only view over a parsed namespace that also knows where each value came from."""

    def __init__(self, ns: argparse.Namespace):
        self._ns = ns

    def __getattr__(self, name):
        ns = object.__getattribute__(self, "_ns")
        return object.__getattribute__(ns, name)

    def source_of(self, name: str) -> str:
        return getattr(self._ns, '_metadata', {}).get(name, {}).get('source', 'Unknown')

    def print_configuration(self, logger: logging.Logger, table_header: Optional[str] = None):
        """Log the effective configuration and the source of every value."""
        config_dict = {k: v for k, v in vars(self._ns).items() if not k.startswith('_')}
        name_width = max([len(k) for k in config_dict] + [4])
        source_width = 8  # "Default", "CLI", "Env"

        if table_header:
            logger.info("=" * 80)
            logger.info(table_header)
            logger.info("=" * 80)

        logger.info(f"{'NAME':<{name_width}}  {'SOURCE':<{source_width}}  VALUE")
        for key in sorted(config_dict):
            logger.info(f"{key:<{name_width}}  {self.source_of(key):<{source_width}}  {config_dict[key]}")


class MetadataArgumentParser(argparse.ArgumentParser):
    """Argument parser that records whether each option came from the CLI, the environment or a default."""

    def add_argument(self, *args, **kwargs):
        env_var = kwargs.pop('env_var', None)

        env_found = False
        if env_var and env_var in os.environ:
            kwargs['default'] = os.environ[env_var]
            env_found = True
            # an env var satisfies a required option
            kwargs['required'] = False

        action = super().add_argument(*args, **kwargs)
        action.env_var = env_var
        action._env_found = env_found

        # special methods are looked up on the class, so wrap __call__ with a subclass
        original_class = action.__class__

        class WrappedAction(original_class):
            def __call__(self, parser, namespace, values, option_string=None):
                if not hasattr(namespace, '_metadata'):
                    namespace._metadata = {}
                namespace._metadata[self.dest] = {'source': 'CLI', 'env_var': self.env_var}
                return super().__call__(parser, namespace, values, option_string)

        action.__class__ = WrappedAction
        return action

    def parse_args(self, args=None, namespace=None):
        ns = super().parse_args(args, namespace)

        if not hasattr(ns, '_metadata'):
            ns._metadata = {}

        for action in self._actions:
            if not hasattr(action, 'env_var') or action.dest == 'help':
                continue
            if action.dest not in ns._metadata:
                source = 'Env' if action._env_found else 'Default'
                ns._metadata[action.dest] = {'source': source, 'env_var': action.env_var}

        return ns


class CLIParser:
    """Parses command-line arguments for the gcf-admin tool."""

    def __init__(self, *args, **kwargs):
        self._args = args
        self._kwargs = kwargs

    def parse(self, argv: Optional[List[str]] = None) -> ParsedCLIArguments:
        return ParsedCLIArguments(copy.deepcopy(self._parse(argv)))

    def build_parser(self) -> MetadataArgumentParser:
        parser = MetadataArgumentParser(*self._args, **self._kwargs)

        parser.add_argument(
            '--project',
            type=str,
            required=True,
            env_var='GOOGLE_CLOUD_PROJECT',
            help='GCP project ID (default: from GOOGLE_CLOUD_PROJECT env var)'
        )
        parser.add_argument(
            '--region',
            type=str,
            default='us-central1',
            env_var='FUNCTION_REGION',
            help='Cloud Functions region (default: from FUNCTION_REGION env var or us-central1)'
        )
        parser.add_argument(
            '--user-agent',
            type=str,
            default=DEFAULT_USER_AGENT,
            help=f'User agent attached to API requests (default: {DEFAULT_USER_AGENT})'
        )
        parser.add_argument(
            '--log-file',
            type=str,
            default=None,
            env_var='GCF_ADMIN_LOG_FILE',
            help='Also write logs to this file'
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Log at DEBUG level and print the effective configuration'
        )

        # plain ArgumentParser for subcommands keeps their namespace free of source metadata
        subparsers = parser.add_subparsers(dest='command', required=True, parser_class=argparse.ArgumentParser)

        subparsers.add_parser('regions', help='List regions available for Cloud Functions')
        subparsers.add_parser('upload-url', help='Generate a signed URL for uploading function source')

        describe = subparsers.add_parser('describe', help='Print a function resource')
        describe.add_argument('--name', type=str, required=True, help='Function name')

        delete = subparsers.add_parser('delete', help='Delete a function')
        delete.add_argument('--name', type=str, required=True, help='Function name')
        delete.add_argument('--delete-timeout', type=int, default=120,
                            help='Seconds to wait for the deletion to complete (default: 120)')

        deploy = subparsers.add_parser('deploy', help='Deploy a function from a local source directory')
        deploy.add_argument('--name', type=str, required=True, help='Function name')
        deploy.add_argument('--runtime', type=str, required=True, help='Runtime, e.g. nodejs20 or python312')
        deploy.add_argument('--entry-point', type=str, required=True, help='Function entry point')
        deploy.add_argument('--source-dir', type=str, required=True, help='Directory holding the function source')
        deploy.add_argument('--memory-mb', type=int, default=256, help='Memory in MB (default: 256)')
        deploy.add_argument('--timeout', type=int, default=60, help='Function request timeout in seconds (default: 60)')
        deploy.add_argument('--max-instances', type=int, default=None, help='Maximum number of instances')
        deploy.add_argument('--env-vars', type=_key_value_pairs, default={},
                            help='Environment variables (comma separated KEY=VALUE pairs)')
        deploy.add_argument('--labels', type=_key_value_pairs, default={},
                            help='Labels (comma separated KEY=VALUE pairs)')
        deploy.add_argument('--deployment-timeout', type=int, default=600,
                            help='Seconds to wait for the deployment to complete (default: 600)')

        return parser

    def _parse(self, argv: Optional[List[str]]) -> argparse.Namespace:
        return self.build_parser().parse_args(argv)
