"""wav2sdriq - add an SDR auxi chunk to a WAV recording."""
from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import click

from sdriq_core.protocol import (
    DEFAULT_IQ_MODE,
    IQ_MODE_QI,
    IQ_MODE_UNKNOWN,
    LEVEL_DIFF_INPUT_MAX,
    LEVEL_DIFF_MIN,
    UINT32_MAX,
)
from sdriq_core.record import MetadataParameters
from sdriq_convert.convert import convert_file

DATETIME_FORMATS = [
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
]

# Default recording length when --end is not given.
DEFAULT_DURATION = timedelta(minutes=5)

HZ = click.IntRange(0, UINT32_MAX)


@click.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", "output_path", required=True, type=click.Path(dir_okay=False, path_type=Path), help="Output file path")
@click.option("-f", "--center-frequency", required=True, type=HZ, help="Receiver center frequency (Hz)")
@click.option("--start", required=True, type=click.DateTime(DATETIME_FORMATS), help="Recording start (local wall clock)")
@click.option("--end", type=click.DateTime(DATETIME_FORMATS), help="Recording end (default: start + 5 min)")
@click.option("--ad-frequency", type=HZ, help="A/D sample frequency before downsampling (Hz)")
@click.option("--if-frequency", type=HZ, help="IF frequency of an external down converter (Hz)")
@click.option("--bandwidth", type=HZ, help="Displayable bandwidth (Hz)")
@click.option("--iq-offset", type=HZ, help="DC offset of I and Q channels (1/1000 count)")
@click.option("--iq-mode", type=click.IntRange(IQ_MODE_UNKNOWN, IQ_MODE_QI), default=DEFAULT_IQ_MODE, show_default=True,
              help="0=UNKNOWN 1=LEFT 2=RIGHT 3=LEFTRIGHT 4=IQ 5=QI")
@click.option("--level-diff", type=click.IntRange(LEVEL_DIFF_MIN, LEVEL_DIFF_INPUT_MAX), help="Level difference (thousandths of a dB)")
@click.option("--frequency-high", type=HZ, help="Center frequency high part")
@click.option("--next-file", help="Next file of a multipart recording (max 48 ASCII bytes)")
@click.option("--prev-file", help="Previous file of a multipart recording (max 48 ASCII bytes)")
@click.option("--atomic", is_flag=True, help="Write to a temporary file and rename on success")
def main(
    input_path: Path,
    output_path: Path,
    center_frequency: int,
    start,
    end,
    ad_frequency,
    if_frequency,
    bandwidth,
    iq_offset,
    iq_mode: int,
    level_diff,
    frequency_high,
    next_file,
    prev_file,
    atomic: bool,
) -> None:
    """Convert a WAV recording INPUT to SDR IQ format."""
    if end is None:
        end = start + DEFAULT_DURATION

    params = MetadataParameters(
        start=start,
        end=end,
        center_frequency=center_frequency,
        ad_frequency=ad_frequency,
        if_frequency=if_frequency,
        bandwidth=bandwidth,
        iq_offset=iq_offset,
        level_diff=level_diff,
        iq_mode=iq_mode,
        frequency_high=frequency_high,
        prev_filename=prev_file,
        next_filename=next_file,
    )
    try:
        convert_file(input_path, output_path, params, atomic=atomic)
    except Exception as e:
        # Fail closed with a single-line reason.
        print(f"FATAL: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
