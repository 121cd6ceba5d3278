import asyncio
import json
import logging
import os
import sys

base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, base_path)

from scripts.check_imports import check_required_imports
check_required_imports(['PyCaption', 'httpx', 'pysubs2'])

from scripts.caption_common import (
    InitLogger,
    CreateArgParser,
    CreateOptions,
    ParseBoxSize,
)

from PyCaption import CaptionTrack, SegmentText, init_captions
from PyCaption.CaptionSource import UrlSource
from PyCaption.Formats.SrtFormat import compose
from PyCaption.Helpers import IsUrl
from PyCaption.Helpers.Time import FormatTimestamp
from PyCaption.Options import Options

parser = CreateArgParser("Loads a caption file and reports the caption active at a playback time")
parser.add_argument('-t', '--at', type=float, default=None, help="Playback time in seconds; print the caption active at this time")
parser.add_argument('--dump', choices=['json', 'srt'], default=None, help="Print all parsed captions in this format")
parser.add_argument('--segment', type=str, default=None, help="Caption box size as HEIGHTxWIDTH in pixels; print the segments of the active caption")
parser.add_argument('--font-size', type=float, default=None, help="Font size in pixels used with --segment")
args = parser.parse_args()

logger_options = InitLogger("caption-sync", args.debug)

async def load_track(options : Options) -> CaptionTrack:
    track = CaptionTrack(options, current_time=lambda: args.at)
    track.events.connect_default_loggers()
    await track.Load(UrlSource(args.input, format=args.format))
    if track.error:
        raise track.error
    return track

try:
    settings = {}
    if args.segment:
        height, width = ParseBoxSize(args.segment)
        settings.update(auto_segment=True, fixed_height=height, max_width=width, font_size=args.font_size)

    options : Options = CreateOptions(args, **settings)

    if IsUrl(args.input):
        track = asyncio.run(load_track(options))
    else:
        track = CaptionTrack(options, current_time=lambda: args.at)
        track.SetCues(init_captions(filepath=args.input, format=args.format, options=options))

    logging.info(f"Loaded {len(track.cues)} captions from {args.input}")

    if args.dump == 'json':
        print(json.dumps([ cue.to_dict() for cue in track.cues ], ensure_ascii=False, indent=2))
    elif args.dump == 'srt':
        print(compose(track.cues))

    if args.at is not None:
        cue = track.current_cue
        if cue is None:
            print(f"No caption at {FormatTimestamp(args.at)}")
        else:
            print(f"[{track.current_index}] {FormatTimestamp(cue.start_time)} --> {FormatTimestamp(cue.end_time)}")
            print(cue.text)

            if args.segment:
                segments = SegmentText(cue.text, options.auto_segment, options.fixed_height, options.font_size, options.max_width, options.line_height)
                for index, segment in enumerate(segments, 1):
                    print(f"--- segment {index}/{len(segments)}")
                    print(segment)

except Exception as e:
    print("Error:", e)
    raise
