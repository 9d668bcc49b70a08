# flake8: noqa E501

from gettext import gettext as _

from roi_annotation.cli import config_flag

COMMAND_DESCRIPTION = _("Interactively annotate a camera feed")


def command(subparser):
    config_flag(subparser)
    subparser.add_argument("camera_id", type=str, help=_("Camera identifier"))
    subparser.add_argument(
        "source",
        type=str,
        help=_("Video source: file, stream URL or device index"),
    )
    subparser.add_argument(
        "-w",
        "--display-width",
        dest="display_width",
        type=int,
        help=_("Width of the annotation window, defaults to ROI_display__width"),
    )
    subparser.add_argument(
        "-t",
        "--tool",
        dest="tool",
        default="rectangle",
        choices=["rectangle", "polyline", "text"],
    )
    subparser.add_argument("--text", dest="text", default="", help=_("Initial label text"))

    def handle(args):
        from .annotator import handle as annotator_handle

        return annotator_handle(args)

    return handle
