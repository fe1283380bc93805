from __future__ import annotations

import logging
import sys

import click

from ja4fp.errors import Ja4Error
from ja4fp.fingerprint import ja4, ja4_raw
from ja4fp.models import PROTOCOL_TCP, ClientHelloRecord
from ja4fp.utils import parse_hex


@click.command()
@click.argument("hello", required=False, default="-")
@click.option("--quic", is_flag=True, help="Mark the handshake as carried over QUIC.")
@click.option("--protocol", type=int, default=PROTOCOL_TCP, show_default=True, help="IP protocol number.")
@click.option("--raw", is_flag=True, help="Also print the unhashed JA4_r rendering.")
@click.option("--verbose", "-v", is_flag=True, help="Log parser decisions to stderr.")
def main(hello: str, quic: bool, protocol: int, raw: bool, verbose: bool) -> None:
    """Print the JA4 fingerprint of a hex-encoded TLS Client Hello record.

    HELLO is the hex dump of the record, starting at the record header.
    Reads it from stdin when omitted or "-".
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if hello == "-":
        hello = click.get_text_stream("stdin").read()
    try:
        record = ClientHelloRecord.from_bytes(parse_hex(hello), protocol_number=protocol, is_quic=quic)
    except Ja4Error as exc:
        raise click.ClickException(str(exc)) from exc

    fingerprint = ja4(record)
    if not fingerprint:
        click.secho("No fingerprint: not a Client Hello or no extensions", fg="yellow", err=True)
        sys.exit(1)
    click.echo(fingerprint)
    if raw:
        click.echo(ja4_raw(record))


if __name__ == "__main__":
    main()
