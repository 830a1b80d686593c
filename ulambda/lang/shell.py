"""Interactive mode for the ulambda interpreter. Uses cmd as backend; statements themselves are handled by Session."""

import cmd


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell. Lines that are not shell commands are fed to the session."""
    intro = "Untyped lambda calculus interpreter :: Python backend\nType '?' or 'help' for more information."
    primary_prompt = "> "
    secondary_prompt = ". "  # shown while a statement continues
    prompt = primary_prompt

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def parseline(self, line):
        """Definitions and continued statements are never commands, even when they start with a command's name."""
        if self.sess.pending or ":=" in line:
            return None, None, line
        return super().parseline(line)

    def default(self, line):
        """Feeds an arbitrary ulambda statement to the session and prints its result, if any."""
        with self.sess.error_handler:  # cmd.Cmd would exit on any Exception
            continued = False
            try:
                continued = self.sess.feed(line)
            finally:
                self.prompt = self.secondary_prompt if continued else self.primary_prompt

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the ulambda interpreter!\n\n"
              "Terms are evaluated call-by-value to closures. A closure prints as λ[ENV]x BODY,\n"
              "where ENV lists the bindings it captured, nearest first. Variables print with the\n"
              "de Bruijn index of their binder, as in x#0.\n\n"
              "Try it out by typing 'K := λx λy x'. This will bind the closure of 'λx λy x' to\n"
              "the name 'K'. Next, try typing '(K λz z)'. Type 'env' to list the current bindings.")

    def do_env(self, arg):
        """Lists the session's bindings, most recent first."""
        for intro, value in self.sess.env:
            print(f"{intro} = {self.sess.display(value)}")

    def emptyline(self):
        """Empty lines neither repeat the last command nor end a continued statement."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
