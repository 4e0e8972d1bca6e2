# -*- coding: utf-8 -
#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.

import logging
import os


def check_is_writable(path):
    try:
        with open(path, 'a') as f:
            f.close()
    except IOError as e:
        raise RuntimeError("Error: '%s' isn't writable [%r]" % (path, e))


class Logger(object):

    LOG_LEVELS = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG
    }
    loglevel = logging.INFO

    error_fmt = r"%(asctime)s [%(process)d] [%(levelname)s] %(message)s"
    datefmt = r"%Y-%m-%d %H:%M:%S"

    def __init__(self, cfg):
        self.error_log = logging.getLogger("redirector.error")
        self.error_log.propagate = False
        self.cfg = cfg
        self.setup(cfg)

    def setup(self, cfg):
        self.loglevel = self.LOG_LEVELS.get(cfg.loglevel.lower(),
                                            logging.INFO)
        self.error_log.setLevel(self.loglevel)

        self._set_handler(self.error_log, cfg.errorlog,
                          logging.Formatter(self.error_fmt, self.datefmt))

    def info(self, msg, *args, **kwargs):
        self.error_log.info(msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self.error_log.debug(msg, *args, **kwargs)

    def log(self, lvl, msg, *args, **kwargs):
        if isinstance(lvl, str):
            lvl = self.LOG_LEVELS.get(lvl.lower(), logging.INFO)
        self.error_log.log(lvl, msg, *args, **kwargs)

    def _get_redirector_handler(self, log):
        for h in log.handlers:
            if getattr(h, "_redirector", False):
                return h

    def _set_handler(self, log, output, fmt):
        # remove previous redirector log handler
        h = self._get_redirector_handler(log)
        if h:
            log.handlers.remove(h)
            h.close()

        if output is None:
            return

        if output == "-":
            h = logging.StreamHandler()
        else:
            check_is_writable(output)
            h = logging.FileHandler(os.path.abspath(output))

        h.setFormatter(fmt)
        h._redirector = True
        log.addHandler(h)
