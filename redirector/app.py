# -*- coding: utf-8 -
#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.

import importlib.util
import importlib.machinery
import os
import sys

from gunicorn.app.base import BaseApplication

from redirector.config import Config
from redirector.glogging import Logger
from redirector.resolver import Resolver
from redirector.routing import RoutingTable, parse_all
from redirector.wsgi import RedirectApp


class RedirectApplication(BaseApplication):
    """\
    Load the redirector settings, build the routing table and serve the
    redirects with gunicorn.

    Everything is validated in ``load_config`` which gunicorn runs before
    binding any socket: an invalid listen address or redirect rule stops
    the process with ``Error: <reason>`` and exit status 1.
    """

    def __init__(self, argv=None, usage=None, prog=None):
        self.argv = argv
        self.options = None
        self.routes = None
        self.log = None
        super().__init__(usage=usage, prog=prog)

    def get_config_from_filename(self, filename):
        if not os.path.exists(filename):
            raise RuntimeError("%r doesn't exist" % filename)

        ext = os.path.splitext(filename)[1]

        try:
            module_name = '__config__'
            if ext in [".py", ".pyc"]:
                spec = importlib.util.spec_from_file_location(module_name,
                                                              filename)
            else:
                msg = "configuration file should have a valid Python extension.\n"
                print(msg, file=sys.stderr)
                loader_ = importlib.machinery.SourceFileLoader(module_name,
                                                               filename)
                spec = importlib.util.spec_from_file_location(module_name,
                                                              filename,
                                                              loader=loader_)
            mod = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = mod
            spec.loader.exec_module(mod)
        except Exception:
            print("Failed to read config file: %s" % filename, file=sys.stderr)
            raise

        return vars(mod)

    def load_config_from_file(self, filename):
        cfg = self.get_config_from_filename(filename)
        for k, v in cfg.items():
            # Ignore unknown names
            if k not in self.options.settings:
                continue
            try:
                self.options.set(k.lower(), v)
            except Exception:
                print("Invalid value for %s: %s\n" % (k, v), file=sys.stderr)
                sys.stderr.flush()
                raise

    def load_config(self):
        self.options = Config(self.usage, prog=self.prog)

        # parse console args
        parser = self.options.parser()
        args = parser.parse_args(self.argv)

        if args.config:
            self.load_config_from_file(args.config)

        # command line settings win over the config file
        for k, v in vars(args).items():
            if v is None:
                continue
            self.options.set(k.lower(), v)

        self.log = Logger(self.options)

        self.routes = RoutingTable()
        parse_all(self.options.listen, self.options.redirect,
                  self.routes, log=self.log)
        self.routes.freeze()

        for k, v in self.options.server_options.items():
            if v is None:
                continue
            self.cfg.set(k, v)

    def load(self):
        return RedirectApp(Resolver(self.routes), log=self.log)

    def run(self):
        if self.options.check_config:
            self.log.info("configuration ok, %d redirect(s)",
                          len(self.routes))
            sys.exit(0)

        self.log.info("starting server on %s", self.options.listen)
        super().run()


def run(argv=None):
    """\
    The ``redirector`` command line runner.
    """
    RedirectApplication(argv, usage="%(prog)s [OPTIONS]").run()


if __name__ == '__main__':
    run()
