from gettext import gettext as _

from roi_annotation.cli import config_flag

COMMAND_DESCRIPTION = _("List the annotation elements stored for a camera")


def command(subparser):
    config_flag(subparser)
    subparser.add_argument("camera_id", type=str, help=_("Camera identifier"))
    subparser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help=_("Print the loaded records instead of summaries"),
    )

    def handle(args):
        from .elements import handle as elements_handle

        return elements_handle(args)

    return handle
