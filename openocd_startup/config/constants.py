"""Fixed strings shared by the option parser and the dispatcher."""

# Exit status when usage text was requested
EXIT_HELP = -1
EXIT_VERSION = 0

# Directive templates understood by the command interpreter
SCRIPT_DIRECTIVE = "script {{{path}}}"
DEBUG_LEVEL_DIRECTIVE = "debug_level {level}"
LOG_OUTPUT_DIRECTIVE = "log_output {path}"
PIPE_DIRECTIVE = "gdb_port pipe; log_output {tool_name}.log"

PIPE_DEPRECATION = (
    "deprecated option: -p/--pipe. Use '-c \"gdb_port pipe; "
    "log_output {tool_name}.log\"' instead."
)

BANNER = "Open On-Chip Debugger {version}"

USAGE_TEXT = (
    "Open On-Chip Debugger\n"
    "Licensed under GNU GPL v2\n"
    "--help       | -h\tdisplay this help\n"
    "--version    | -v\tdisplay {app_name} version\n"
    "--file       | -f\tuse configuration file <name>\n"
    "--search     | -s\tdir to search for config files and scripts\n"
    "--debug      | -d\tset debug level <0-4>\n"
    "--log_output | -l\tredirect log output to file <name>\n"
    "--command    | -c\trun <command>\n"
)
