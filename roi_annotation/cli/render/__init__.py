from gettext import gettext as _
from pathlib import Path

from roi_annotation.cli import config_flag

COMMAND_DESCRIPTION = _("Burn a camera's annotation elements into an image")


def parse_size(value: str):
    width, _sep, height = value.lower().partition("x")
    return int(width), int(height)


def command(subparser):
    config_flag(subparser)
    subparser.add_argument("camera_id", type=str, help=_("Camera identifier"))
    subparser.add_argument("image", type=Path, help=_("Input frame"))
    subparser.add_argument("output", type=Path, help=_("Where to write the result"))
    subparser.add_argument(
        "-n",
        "--native-size",
        dest="native_size",
        type=parse_size,
        help=_(
            "Camera resolution as WIDTHxHEIGHT when the input frame is not "
            "at native resolution"
        ),
    )

    def handle(args):
        from .render import handle as render_handle

        return render_handle(args)

    return handle
