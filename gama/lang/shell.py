"""Handles interactive/command-line mode for the gama interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """gama interpreter shell."""
    intro = "gama interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary gama statements."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line, self.sess.limits)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt
                self.sess.add(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default(f"help {arg}")
        self.stdout.write("Welcome to the gama interpreter!\n\n"
                          "gama is a small imperative language with integer variables and Spanish keywords.\n"
                          "Statements run as soon as they are complete; variables are kept between lines.\n\n"
                          "Try it out by typing 'Entero a = 8, b = 3;' and then 'Imprimir(a + b);'. Blocks\n"
                          "may span several lines: 'Mientras (a > 0) {' continues until the matching '}'.\n\n"
                          "Commands: 'vars' lists variables, 'exit' (or Ctrl-D) leaves the shell.\n")

    def do_vars(self, arg):
        """Lists variables and their values."""
        if arg:
            return self.default(f"vars {arg}")
        for name, value in self.sess.symtab.snapshot().items():
            self.stdout.write(f"{name} = {'<undefined>' if value is None else value}\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")  # 'exit = 1;' is an assignment to a variable named exit
        return True
