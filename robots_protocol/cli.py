# === FILE: robots_protocol/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для проверки robots.txt и X-Robots-Tag через командную строку.

Команды:
  txt FILE    Разобрать robots.txt и проверить пути для user-agent'ов
  tag FILE    Разобрать значения X-Robots-Tag (по одному в строке)
  config      Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию встроенные настройки)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию

Пример:
  robots-protocol txt robots.txt -u my-bot -u other-bot -p / -p /private/
"""
import sys
from typing import List, Sequence, TextIO

import click

from robots_protocol import __version__
from robots_protocol.config import ParserConfig, load_config
from robots_protocol.logger import DEFAULT_FORMAT, init_logging
from robots_protocol.tag import RobotsTag
from robots_protocol.txt import RobotsTxt

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _print_errors(errors: Sequence) -> None:
    for error in errors:
        click.secho(f'Error at {error.line}: {error.code.description}', fg='yellow')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='robots-protocol, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд robots-protocol CLI."""
    init_logging(level=log_level, log_file=log_file, log_format=log_format)
    cfg = ParserConfig()
    if config_path is not None:
        try:
            cfg = load_config(config_path)
        except Exception as e:
            print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('txt', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option(
    '--user-agent', '-u', 'user_agents',
    multiple=True,
    help='User-agent для проверки (можно указать несколько раз)'
)
@click.option(
    '--path', '-p', 'paths',
    multiple=True, default=('/',), show_default=True,
    help='Путь (с query) для проверки (можно указать несколько раз)'
)
@click.option(
    '--ignore-allow', is_flag=True,
    help='Игнорировать директиву Allow (override конфига)'
)
@click.pass_context
def txt(ctx, source: TextIO, user_agents: Sequence[str], paths: Sequence[str], ignore_allow):
    """Разобрать robots.txt и вывести вердикты для путей."""
    cfg: ParserConfig = ctx.obj['config']
    options = cfg.txt_options()
    if ignore_allow:
        options['ignore_allow_directive'] = True

    robots_txt = RobotsTxt(match_timeout=cfg.match_timeout)
    errors = robots_txt.load(source, **options)
    _print_errors(errors)

    for field_name in sorted(cfg.custom_fields):
        for value in sorted(robots_txt.get_custom(field_name)):
            click.echo(f'{field_name}: {value}')

    agents: List[str] = list(user_agents) or list(cfg.user_agents)
    for agent in agents:
        crawl_delay = robots_txt.get_crawl_delay(agent)
        click.echo(f'Crawl-delay ({agent}): {"-" if crawl_delay is None else crawl_delay}')

    for path in paths:
        for agent in agents:
            result = robots_txt.match(agent, path)
            verdict = 'allowed' if result.is_allowed else 'disallowed'
            rule = str(result.directive) if result.user_agent else 'no matching rule'
            click.echo(f"'{path}' {verdict} for '{agent}' ({rule})")

    for sitemap in sorted(robots_txt.sitemaps):
        click.echo(f'Sitemap: {sitemap}')


@cli.command('tag', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option(
    '--user-agent', '-u', 'user_agent',
    default='robots', show_default=True,
    help='User-agent, для которого выводятся теги'
)
@click.option(
    '--directive', '-d', 'directive',
    default=None,
    help='Вывести только теги этой директивы'
)
@click.pass_context
def tag(ctx, source: TextIO, user_agent: str, directive):
    """Разобрать значения X-Robots-Tag (по одному в строке) и вывести теги."""
    cfg: ParserConfig = ctx.obj['config']
    robots_tag = RobotsTag()
    entries = [line.rstrip('\r\n') for line in source]
    errors = robots_tag.load(entries, cfg.special_words)
    _print_errors(errors)

    for item in sorted(robots_tag.get_tags(user_agent, directive), key=str):
        click.echo(str(item))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg: ParserConfig = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
