from gettext import gettext as _

from roi_annotation.cli import config_flag

COMMAND_DESCRIPTION = _("Check every camera's stored elements and report bad records")


def command(subparser):
    config_flag(subparser)

    def handle(args):
        from .validate import handle as validate_handle

        return validate_handle(args)

    return handle
