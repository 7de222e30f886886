import colorama

colorama.init()

# standard imports
import os, sys
import argparse, traceback


class ToolError(Exception):
    pass


class ArgParser(object):
    def __init__(self, program_name, description=None):
        self.__parser = argparse.ArgumentParser(prog=program_name, description=description, add_help=True)
        self.__main_group = self.__parser.add_argument_group("Specific arguments")

    def add_argument(self, long_opt, desc, short_opt=None, required=False, default=None, *args, **kwargs):
        # For easy writting, user use '=' at param name end if it receive a value
        # And omit it if this parameter is just a flag
        #
        # All the standard parameters of argparse.ArgumentParser().add_argument() are also accepted :
        # eg. parser.add_argument("max-lines=", "Maximum number of lines", type=int)
        #
        if long_opt.endswith('='):
            action = "store"
            long_opt = long_opt[:-1]
        else:
            # Flag mode
            action = "store_true"
            if default is None:
                default = False

        names = ["--" + long_opt]
        if short_opt:
            names.insert(0, "-" + short_opt)

        self.__main_group.add_argument(*names, help=desc, dest=long_opt, action=action, default=default, required=required, *args, **kwargs)

    def parse(self, args=None):
        return self.__parser.parse_args(args=args)


class Template:
    _MODULE_FILE = sys.executable if getattr(sys, 'frozen', False) else __file__
    _PROGRAM_NAME = os.path.basename(_MODULE_FILE)
    _DESCRIPTION = None

    def __init__(self):
        self.__arg_parser = ArgParser(self._PROGRAM_NAME, self._DESCRIPTION)
        self.__with_traceback = False
        self.__args_defined = False

    def init_from_custom_args(self, args):
        """
        module mode, with arguments like when called in standalone

        errors are not caught, the caller gets the exception
        """
        self.__parse_args(args)
        return self._doit() or 0

    def _init_from_sys_args(self, args=None):
        """ standalone mode: any error ends up as a one-line message and rc 1 """
        try:
            return self.init_from_custom_args(args)
        except (ToolError, OSError) as e:
            self.__report(self.describe_error(e))
        except Exception as e:
            self.__with_traceback = True
            self.__report(str(e))

        return 1

    def __report(self, msg):
        if self.__with_traceback:
            self._message(traceback.format_exc().rstrip(), with_prefix=False)
        self._message('{}error: {}{}'.format(colorama.Fore.LIGHTRED_EX, msg, colorama.Fore.RESET), with_prefix=False)

    @staticmethod
    def describe_error(e):
        if isinstance(e, OSError) and e.strerror:
            if e.filename is not None:
                return "{}: {}".format(e.filename, e.strerror)
            return e.strerror
        return str(e)

    def _message(self, msg, with_prefix=True):
        if with_prefix:
            msg = "{}: {}\n".format(self._PROGRAM_NAME, msg)
        else:
            msg += "\n"

        sys.stderr.write(msg)
        sys.stderr.flush()

    def _error(self, msg, with_traceback=False):
        self.__with_traceback = with_traceback
        raise ToolError(msg)

    @staticmethod
    def __get_variable_name(v):
        return "".join([x.lower() if x.isalnum() else "_" for x in v])

    def __parse_args(self, args=None):
        # Define authorized args
        if not self.__args_defined:
            self._define_args(self.__arg_parser)
            self.__args_defined = True

        # Parse passed args
        options = self.__arg_parser.parse(args=args)
        for key, value in options.__dict__.items():
            setattr(self, "_%s" % self.__get_variable_name(key), value)

    def _define_args(self, parser):
        # Note :
        # Each long opt will correspond to a variable which can be exploited in the "doit" phase
        # All '-' will be converted to '_' and every upper chars will be lowered
        # Exemple :
        #   My-Super-Opt --> self._my_super_opt
        raise NotImplementedError

    def _doit(self):
        raise NotImplementedError
