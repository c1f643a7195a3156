"""Stake Pool CLI."""
import json
import sys
from datetime import datetime, timezone
from typing import Optional, Tuple

import click
import yaml
from loguru import logger
from pydantic import ValidationError

from . import __version__
from .core.clock import ManualClock
from .core.config import LOG_LEVEL_ENV, LOG_LEVELS, configure_logging, get_log_level, load_config
from .core.distribution import Distribution
from .core.errors import DeadlineExceeded
from .core.pool import ENROLLMENT_WINDOW, StakePool
from .core.stake import UINT64_MAX

# Reward split used by the demo command
DEMO_TOTAL_REWARD = 1_000_000
DEMO_STAKES = (("Alice", 5_000), ("Bob", 20_000))

def parse_stake_pair(value: str) -> Tuple[str, int]:
    """Parse a NAME=AMOUNT command line pair."""
    name, sep, amount = value.rpartition('=')
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=AMOUNT, got '{value}'", param_hint='--stake')
    try:
        parsed = int(amount)
    except ValueError:
        raise click.BadParameter(f"amount for {name} must be an integer, got '{amount}'", param_hint='--stake')
    if parsed < 0:
        raise click.BadParameter(f"amount for {name} must not be negative", param_hint='--stake')
    if parsed > UINT64_MAX:
        raise click.BadParameter(f"amount for {name} must not exceed {UINT64_MAX}", param_hint='--stake')
    return name, parsed

def parse_instant(value: Optional[str], param: str, opens_window: bool = False) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp, treating naive values as UTC.

    With opens_window set, the instant must leave room for a full
    enrollment window before the end of the calendar.
    """
    if value is None:
        return None
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not an ISO 8601 timestamp", param_hint=param)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    try:
        moment = moment.astimezone(timezone.utc)
        if opens_window:
            moment + ENROLLMENT_WINDOW
    except OverflowError:
        raise click.BadParameter(f"'{value}' is too close to the end of the calendar", param_hint=param)
    return moment

def make_pool(total_reward: int, created_at: Optional[datetime]) -> StakePool:
    """Build a pool, backdated to created_at when given."""
    if created_at is None:
        return StakePool(total_reward)
    clock = ManualClock(created_at)
    pool = StakePool(total_reward, clock=clock)
    clock.set(datetime.now(timezone.utc))
    return pool

def echo_distribution(result: Distribution) -> None:
    """Print a distribution as a table."""
    if not result.entries:
        click.echo("\nNo stake recorded, nothing to distribute.")
        click.echo(f"Undistributed: {result.undistributed}")
        return

    click.echo(f"\nReward distribution ({result.total_reward} across {result.total_staked} staked):")
    click.echo("-" * 60)
    click.echo(f"{'Participant':<30}{'Stake':>15}{'Reward':>15}")
    click.echo("-" * 60)
    for entry in result.entries:
        click.echo(f"{entry.participant_id:<30}{entry.stake:>15}{entry.reward:>15}")
    click.echo("-" * 60)
    click.echo(f"Total distributed: {result.total_distributed}")
    click.echo(f"Undistributed: {result.undistributed}")

@click.group()
@click.version_option(version=__version__, prog_name="stake-pool")
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None,
              help='Log level (defaults to $STAKEPOOL_LOG_LEVEL or INFO)')
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]):
    """Stake Pool CLI for splitting a fixed reward across stakers."""
    ctx.ensure_object(dict)
    ctx.obj['log_level'] = log_level
    try:
        configure_logging(log_level or get_log_level())
    except ValueError as e:
        raise click.UsageError(f"{e}; set {LOG_LEVEL_ENV} to one of {', '.join(LOG_LEVELS)}")

@cli.command()
def demo():
    """Run the two-staker example distribution."""
    pool = StakePool(DEMO_TOTAL_REWARD)
    for participant_id, amount in DEMO_STAKES:
        pool.stake(participant_id, amount)
    logger.info(f"Staked {len(pool)} participants into a pool of {DEMO_TOTAL_REWARD}")
    echo_distribution(pool.distribution())

@cli.command()
@click.option('--reward', type=click.IntRange(min=0, max=UINT64_MAX), default=None, help='Total reward to distribute')
@click.option('--stake', 'stakes', multiple=True, help='Stake as NAME=AMOUNT; repeat for each participant')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='YAML file with total_reward and stakes')
@click.option('--created-at', default=None, help='Backdate the pool to this ISO 8601 instant')
@click.option('--json', 'as_json', is_flag=True, default=False, help='Print the distribution as JSON')
@click.pass_context
def distribute(ctx: click.Context, reward: Optional[int], stakes: Tuple[str, ...], config_path: Optional[str],
               created_at: Optional[str], as_json: bool):
    """Stake each participant and print their share of the reward."""
    pairs = [parse_stake_pair(value) for value in stakes]
    started = parse_instant(created_at, '--created-at', opens_window=True)

    try:
        config = load_config(config_path)
    except (yaml.YAMLError, ValidationError) as e:
        logger.error(f"Failed to load config: {e}")
        sys.exit(1)
    if config_path and not ctx.obj.get('log_level'):
        configure_logging(config.log_level)

    total_reward = reward if reward is not None else config.total_reward
    pool = make_pool(total_reward, started)

    try:
        for participant_id, amount in list(config.stakes.items()) + pairs:
            pool.stake(participant_id, amount)
    except DeadlineExceeded as e:
        logger.error(f"Failed to stake: {e}")
        sys.exit(1)
    except ValidationError as e:
        logger.error(f"Invalid stake: {e}")
        sys.exit(1)

    result = pool.distribution()
    logger.info(f"Distributed {result.total_distributed} of {result.total_reward} to {len(result.entries)} participants")
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        echo_distribution(result)

@cli.command()
@click.option('--created-at', required=True, help='Instant the pool was created (ISO 8601)')
@click.option('--now', 'now_value', default=None, help='Instant to check against (defaults to current time)')
def check(created_at: str, now_value: Optional[str]):
    """Show whether a pool created at the given instant still accepts stakes."""
    started = parse_instant(created_at, '--created-at', opens_window=True)
    now = parse_instant(now_value, '--now') or datetime.now(timezone.utc)

    clock = ManualClock(started)
    pool = StakePool(0, clock=clock)
    clock.set(now)

    status = "open" if pool.is_open() else "closed"
    click.echo(f"Enrollment is {status}")
    click.echo(f"Deadline: {pool.deadline.isoformat()}")
    click.echo(f"Time remaining: {pool.time_remaining()}")

if __name__ == "__main__":
    cli()
