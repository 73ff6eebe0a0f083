"""tmateboot command-line interface"""

import os
import sys
from typing import MutableMapping, NoReturn, Optional, Sequence

import yaml

from tmateboot.bootstrap.flags import usage_get
from tmateboot.bootstrap.orchestrator import progname_get, startup_run
from tmateboot.client.client_logging import clientLogFile_get, logLevel_resolve, logging_setup
from tmateboot.client.main import ClientEntry, clientMain_run
from tmateboot.common.config import Config, ConfigLoader
from tmateboot.common.errors import ConfigError, LocaleError, SocketDirectoryError, UsageError


def loggingWithConfig_setup(
    config: Config, progname: str, verbosity: int, load_error: Optional[Exception] = None
) -> None:
    """
    Setup logging from settings and the -v/-F verbosity.

    Runs once flags are parsed, so `-V` and `-h` work with a broken
    settings file.

    Args:
        config: Loaded settings.
        progname: Program name for the client log file.
        verbosity: Verbosity steps above the configured level.
        load_error: Failure from loading the settings file, if any.

    Raises:
        ConfigError: The settings file could not be loaded.
    """
    if load_error is not None:
        raise ConfigError(str(load_error)) from load_error
    level: str = logLevel_resolve(config.logging.level, verbosity)
    log_file: Optional[str] = clientLogFile_get(progname, verbosity, config.logging.file)
    logging_setup(level, config.logging.format, log_file)


def run(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[MutableMapping[str, str]] = None,
    client_entry: Optional[ClientEntry] = None,
) -> int:
    """
    Run startup and hand off to the client.

    Args:
        argv: Full argument vector (defaults to sys.argv).
        environ: Process environment (defaults to os.environ).
        client_entry: Client to run instead of the registered one.

    Returns:
        Exit status.
    """
    argv = list(sys.argv if argv is None else argv)
    env: MutableMapping[str, str] = os.environ if environ is None else environ
    progname: str = progname_get(argv)

    load_error: Optional[Exception] = None
    try:
        config: Config = ConfigLoader.config_load(environ=env)
    except (OSError, ValueError, yaml.YAMLError) as e:
        config = Config()
        load_error = e

    try:
        context = startup_run(
            argv,
            env,
            config.runtime,
            logging_setup_func=lambda verbosity: loggingWithConfig_setup(
                config, progname, verbosity, load_error
            ),
        )
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1
    except UsageError as e:
        if str(e):
            print(f"{progname}: {e}", file=sys.stderr)
        sys.stderr.write(usage_get(progname))
        return 1
    except LocaleError as e:
        print(f"{progname}: {e}", file=sys.stderr)
        return 1
    except SocketDirectoryError as e:
        print(f"can't create socket: {e}", file=sys.stderr)
        return 1

    return clientMain_run(context, env, client_entry)


def main() -> NoReturn:
    """Main entry point for the tmateboot command"""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)


if __name__ == "__main__":
    main()
