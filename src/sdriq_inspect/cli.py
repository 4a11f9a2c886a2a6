import json
from pathlib import Path
import click
from .logic import inspect_file

@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def main(path: Path):
    """Print the auxi record of an SDR IQ file as JSON."""
    result = inspect_file(path)
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

if __name__ == "__main__":
    main()
