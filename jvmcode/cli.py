import click
from pathlib import Path
import json
import sys

from jvmcode import logger, jvm, render
from jvmcode.decoder import decode_report
from jvmcode.logger import log
from jvmcode.model import JsonConstantPool


def hex_parser(ctx_, parms_, text):
    if text is None:
        return None
    try:
        return bytes.fromhex("".join(text.split()))
    except ValueError as e:
        raise click.BadParameter(str(e))


def constants_parser(ctx_, parms_, path):
    if path is None:
        return None
    try:
        return JsonConstantPool.load(path)
    except (OSError, ValueError) as e:
        raise click.BadParameter(f"could not read constant pool {path}: {e}")


def opcode_parser(ctx_, parms_, text):
    text = text.strip()
    try:
        if text.lower().startswith("0x"):
            return jvm.lookup(int(text, 16))
        if text.isdigit():
            return jvm.lookup(int(text))
    except ValueError:
        raise click.BadParameter(f"{text!r} is not an opcode")
    return jvm.by_mnemonic(text)


def catalog_row(ins: jvm.Instruction) -> str:
    return f"{ins.opcode:3d} 0x{ins.opcode:02X} {ins.name:<16} {ins.shape}"


@click.group()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="sets the verbosity of the program, more means more information",
)
def cli(verbose):
    """This is the jvmcode main entry point."""
    logger.initialize(verbose)


@cli.command()
@click.option(
    "--hex",
    "code",
    help="The code array as hexadecimal digits, whitespace is ignored.",
    callback=hex_parser,
)
@click.option(
    "--length",
    type=click.IntRange(min=0),
    help="The declared length of the code array, defaults to all of it.",
)
@click.option(
    "--strict / --no-strict",
    default=False,
    help="stop at the first unknown opcode instead of skipping it.",
)
@click.option(
    "--constants",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="A JSON file describing the constant pool entries.",
    callback=constants_parser,
)
@click.option(
    "--format",
    type=click.Choice(["pretty", "json", "repr"], case_sensitive=True),
    default="pretty",
    help="The format to print the instructions in.",
)
@click.argument("FILE", type=click.File("rb"), required=False)
def decode(code, file, length, strict, constants, format):
    """Decode the code array in FILE (or '-' for stdin)."""

    if code is not None and file is not None:
        raise click.UsageError("Expected either --hex or FILE, not both.")
    if code is None:
        if file is None:
            raise click.UsageError("Expected either --hex or FILE.")
        code = file.read()

    log.debug(f"Decoding {len(code)} byte(s)")
    try:
        report = decode_report(code, length, strict=strict)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--length")

    match format:
        case "pretty":
            for ins in report:
                click.echo(render.format_instruction(ins, constants))
        case "repr":
            for ins in report:
                click.echo(repr(ins))
        case "json":
            click.echo(json.dumps(render.report_as_json(report, constants), indent=2))

    if not report.complete:
        log.error(f"Decoded only {report.covered} of {report.length} byte(s)")
        sys.exit(1)

    log.success(f"Decoded {len(report)} instruction(s)")


@cli.command()
@click.option(
    "--reserved / --no-reserved",
    default=True,
    help="include the reserved opcodes.",
)
def opcodes(reserved):
    """List the instruction catalog."""
    for ins in jvm.INSTRUCTIONS:
        if ins.reserved and not reserved:
            continue
        click.echo(catalog_row(ins))


@cli.command()
@click.argument("OPCODE", callback=opcode_parser)
def lookup(opcode):
    """Show the catalog entry of an OPCODE, given as a number or a mnemonic."""
    if opcode is None:
        log.error("No such opcode")
        sys.exit(1)

    click.echo(catalog_row(opcode))
    click.echo(opcode.docs)


if __name__ == "__main__":
    cli()
