"""reqline CLI - issue one HTTP request and print or save the response."""

import sys

import click

from reqline import __version__
from reqline.options import Method

TOOL_HELP = """\
reqline - send one HTTP request and print or save the response.

\b
EXAMPLES
────────
  reqline http://localhost:3000/health
  reqline -X POST -H "Content-Type:application/json" -d '{"a":1}' http://localhost:3000/api
  reqline -X post -F name=test -F email=a@b.com http://localhost:3000/users
  reqline -v -o page.html https://example.com/

\b
BODY
────
  -F key=value   Form field, sent as application/x-www-form-urlencoded.
  -d fragment    Raw body fragment. Repeated fragments are joined with '&'.

  Only POST, PUT and PATCH send a body. When -F and -d are both given,
  the form wins and -d is ignored.

\b
HEADERS
───────
  -H name:value  Exactly one ':' per header. Names are lower-cased.

\b
CONFIG FILE (-c/--config)
─────────────────────────
  No config is read unless -c is given.

  \b
  defaults:
    timeout: 10                 # seconds, default: no timeout
    env_file: .env              # relative to the config file
    headers:
      authorization: Bearer ${API_TOKEN}
"""


@click.command(
    help=TOOL_HELP,
    context_settings={"max_content_width": 88},
)
@click.argument("uri")
@click.option(
    "-X",
    "--method",
    type=click.Choice([m.value for m in Method], case_sensitive=False),
    default=Method.GET.value,
    show_default=True,
    help="HTTP method for the request.",
)
@click.option(
    "-H",
    "--header",
    multiple=True,
    help="Header as 'name:value'. Repeatable.",
)
@click.option(
    "-F",
    "--form",
    multiple=True,
    help="Form field as 'key=value'. Repeatable. POST/PUT/PATCH only.",
)
@click.option(
    "-d",
    "--data",
    multiple=True,
    help="Body fragment, joined with '&'. Repeatable. POST/PUT/PATCH only.",
)
@click.option(
    "-o",
    "--out-path",
    default=None,
    metavar="PATH",
    help="Save the response body to PATH instead of printing it.",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Print request and response metadata.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Request timeout in seconds, greater than 0. Default: none.",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    default=None,
    metavar="PATH",
    help="YAML config file with default headers and timeout.",
)
@click.version_option(__version__, prog_name="reqline")
def main(uri, method, header, form, data, out_path, verbose, timeout, config_file):
    """Send one HTTP request."""
    from reqline.errors import ReqlineError

    try:
        _run(uri, method, header, form, data, out_path, verbose, timeout, config_file)
    except ReqlineError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(e.exit_code)


def _run(uri, method, header, form, data, out_path, verbose, timeout, config_file):
    from reqline import executor
    from reqline.assembler import build_request
    from reqline.config import default_headers, default_timeout, load_config
    from reqline.options import parse_options
    from reqline.presenter import choose_sink, print_request, print_response

    config = load_config(config_file)

    options = parse_options(
        uri,
        method=method,
        headers=header,
        form=form,
        data=data,
        out_path=out_path,
        verbose=verbose,
        timeout=timeout if timeout is not None else default_timeout(config),
        default_headers=default_headers(config),
    )
    sink = choose_sink(options.out_path)
    request = build_request(options)

    if options.verbose:
        print_request(request)

    response = executor.send_request(request, timeout=options.timeout)

    if options.verbose:
        print_response(response)

    sink.write(response.text)
