"""Command-line upload client: validate, convert, report savings, save."""
import logging
import mimetypes
import sys
from pathlib import Path

import click

from converter.client import state as upload_state
from converter.client.api import ConversionRequestError, ConverterClient
from converter.client.downloads import DEFAULT_BUNDLE_NAME, DownloadError, save_bundle, save_result
from converter.client.formatting import describe_savings, format_bytes
from converter.client.models import ClientFile
from converter.config import CONVERTER_API_URL

mimetypes.add_type("image/webp", ".webp")
mimetypes.add_type("image/avif", ".avif")


def _read_file(path: Path) -> ClientFile:
    content_type, _ = mimetypes.guess_type(path.name)
    return ClientFile(
        name=path.name,
        data=path.read_bytes(),
        content_type=content_type or "application/octet-stream",
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose: bool) -> None:
    """Convert images to WebP, AVIF, JPEG or PNG through the converter API."""
    logging.getLogger("converter").setLevel(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-t", "--to", "target_format", default="webp", show_default=True,
              type=click.Choice(upload_state.SUPPORTED_FORMATS, case_sensitive=False), help="Target format")
@click.option("-o", "--out", "out_dir", default=".", show_default=True,
              type=click.Path(file_okay=False, path_type=Path), help="Output directory")
@click.option("--zip", "as_zip", is_flag=True, help=f"Save all results as {DEFAULT_BUNDLE_NAME}")
@click.option("--server", default=CONVERTER_API_URL, show_default=True, help="Converter API base URL")
def convert(paths: tuple[Path, ...], target_format: str, out_dir: Path, as_zip: bool, server: str) -> None:
    """Convert PATHS and save the results."""
    state = upload_state.select_format(upload_state.UploadState(), target_format)
    state = upload_state.add_files(state, [_read_file(path) for path in paths])
    for rejection in state.rejections:
        click.echo(rejection, err=True)

    state = upload_state.begin_submit(state)
    if not state.uploading:
        click.echo("No valid image files to convert", err=True)
        sys.exit(1)

    click.echo(f"Converting {len(state.pending)} file(s) to {state.target_format.upper()}...")
    client = ConverterClient(server)
    try:
        response = client.convert(list(state.pending), state.target_format)
    except ConversionRequestError as e:
        state = upload_state.submit_failed(state, e.message)
        for failed in e.failed:
            click.echo(f"  {failed.name}: {failed.error}", err=True)
    else:
        state = upload_state.submit_succeeded(state, response.results, response.failed)

    for failed in state.failed:
        click.echo(f"  {failed.name}: {failed.error}", err=True)
    if not state.results:
        click.echo(state.error or upload_state.GENERIC_SUBMIT_ERROR, err=True)
        sys.exit(1)

    for result in state.results:
        click.echo(
            f"  {result.name}: {format_bytes(result.original_size)} -> {format_bytes(result.converted_size)} "
            f"({describe_savings(result.original_size, result.converted_size)})"
        )

    try:
        if as_zip:
            saved = save_bundle(list(state.results), out_dir)
            click.echo(f"Saved {saved}")
            return
    except DownloadError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    saved_count = 0
    for result in state.results:
        try:
            click.echo(f"Saved {save_result(result, out_dir)}")
            saved_count += 1
        except DownloadError as e:
            click.echo(str(e), err=True)
    if not saved_count:
        sys.exit(1)


@cli.command()
@click.option("--server", default=CONVERTER_API_URL, show_default=True, help="Converter API base URL")
def formats(server: str) -> None:
    """List the target formats the server accepts."""
    for fmt in ConverterClient(server).formats():
        click.echo(fmt)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
