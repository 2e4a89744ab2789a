#!/usr/bin/env python3
"""leadbook CLI entrypoint."""

import argparse
import logging
import sys

from leadbook.commands import actions
from leadbook.commands import archive as cmd_archive_module
from leadbook.commands import list as cmd_list_module
from leadbook.commands import show as cmd_show_module
from leadbook.commands.execute import execute
from leadbook.lib.config import load_config
from leadbook.lib.errors import LeadError
from leadbook.lib.names import CompanyName, InterviewName
from leadbook.lib.timeparse import ACCEPTED_FORMATS, parse_optional, parse_when, utc_now

logger = logging.getLogger("leadbook")


def setup_logging(verbose: bool = False) -> None:
    """Send leadbook logs to stderr. WARNING and up unless --verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                                           datefmt="%H:%M:%S"))
    logger.handlers[:] = [handler]
    logger.setLevel(level)


def _target(args):
    return CompanyName(args.company), args.position


def build_new(args, now):
    return actions.NewLead(CompanyName(args.company), args.title, args.source)


def build_close(args, now):
    company, index = _target(args)
    return actions.CloseLead(company, index, args.reason)


def build_status(args, now):
    company, index = _target(args)
    return actions.AddStatus(company, index, args.text)


def build_note(args, now):
    company, index = _target(args)
    return actions.AddNote(company, index, args.category, args.text)


def build_detail(args, now):
    company, index = _target(args)
    return actions.AddDetail(company, index, args.kind, args.text)


def build_red_flag(args, now):
    company, index = _target(args)
    return actions.AddRedFlag(company, index, args.text)


def build_pre_interview(args, now):
    company, index = _target(args)
    return actions.PreInterview(
        company, index, InterviewName(args.interview), args.notes,
        planned=parse_optional(args.planned, now),
        new_entry=args.new,
    )


def build_post_interview(args, now):
    company, index = _target(args)
    return actions.PostInterview(
        company, index, InterviewName(args.interview), args.notes,
        held_on=parse_optional(args.held_on, now),
    )


def build_todo_add(args, now):
    company, index = _target(args)
    return actions.AddTodo(company, index, args.action, parse_when(args.deadline, now))


def build_todo_done(args, now):
    company, index = _target(args)
    return actions.CompleteTodo(company, index, args.task)


def build_wait_add(args, now):
    company, index = _target(args)
    return actions.AddWait(company, index, args.action, parse_optional(args.expected, now))


def build_wait_done(args, now):
    company, index = _target(args)
    return actions.CompleteWait(company, index, args.task)


def cmd_mutate(args, config) -> int:
    """Build the typed command from args and run it against the stores."""
    now = args.started_at
    when = parse_when(args.when, now) if args.when else now
    command = args.build(args, now)
    print(execute(command, config, when))
    return 0


def cmd_list(args, config) -> int:
    return cmd_list_module.cmd_list(args, config)


def cmd_show(args, config) -> int:
    return cmd_show_module.cmd_show(args, config)


def cmd_archive(args, config) -> int:
    return cmd_archive_module.cmd_archive(args, config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='leads', description='Job-search lead tracker')
    parser.add_argument('--data', help='Active store file (default: $LEADBOOK_DATA or config)')
    parser.add_argument('--archive', help='Archive store file (default: $LEADBOOK_ARCHIVE or config)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # Shared by every command that targets one position
    target = argparse.ArgumentParser(add_help=False)
    target.add_argument('company', help='Company name (exact match)')
    target.add_argument('--position', '-i', type=int, help='Position index, needed if the company has several')

    # Shared by every mutating command that records a time
    timed = argparse.ArgumentParser(add_help=False)
    timed.add_argument('--when', '-w', help=f'When it happened (default: now). Formats: {ACCEPTED_FORMATS}. Write negative offsets as --when=-2h')

    # leads new
    p_new = subparsers.add_parser('new', help='Start tracking a position')
    p_new.add_argument('company', help='Company name')
    p_new.add_argument('title', help='Position title')
    p_new.add_argument('source', help='Where the lead came from, e.g. a URL')
    p_new.set_defaults(func=cmd_mutate, build=build_new, when=None)

    # leads close
    p_close = subparsers.add_parser('close', parents=[target, timed], help='Close a lead and move it to the archive')
    p_close.add_argument('reason', help='Why it ended, e.g. "Rejected"')
    p_close.set_defaults(func=cmd_mutate, build=build_close)

    # leads status
    p_status = subparsers.add_parser('status', parents=[target, timed], help='Add a status update')
    p_status.add_argument('text', help='Status text')
    p_status.set_defaults(func=cmd_mutate, build=build_status)

    # leads note
    p_note = subparsers.add_parser('note', parents=[target], help='Add a note')
    p_note.add_argument('text', help='Note text')
    p_note.add_argument('--category', '-c', default='misc', help='Note category (default: misc)')
    p_note.set_defaults(func=cmd_mutate, build=build_note, when=None)

    # leads detail
    p_detail = subparsers.add_parser('detail', parents=[target], help='Record a detail (salary, remote, ...)')
    p_detail.add_argument('kind', help='Kind of detail, e.g. "Salary"')
    p_detail.add_argument('text', help='Detail text')
    p_detail.set_defaults(func=cmd_mutate, build=build_detail, when=None)

    # leads red-flag
    p_flag = subparsers.add_parser('red-flag', parents=[target], help='Record a red flag')
    p_flag.add_argument('text', help='What looked wrong')
    p_flag.set_defaults(func=cmd_mutate, build=build_red_flag, when=None)

    # leads pre-interview
    p_pre = subparsers.add_parser('pre-interview', parents=[target, timed], help='Notes before an interview')
    p_pre.add_argument('interview', help='Name or stage of the interview')
    p_pre.add_argument('notes', help='Things to know')
    p_pre.add_argument('--planned', help='When the interview is planned')
    p_pre.add_argument('--new', action='store_true', help='Start a new entry even if one has this name')
    p_pre.set_defaults(func=cmd_mutate, build=build_pre_interview)

    # leads post-interview
    p_post = subparsers.add_parser('post-interview', parents=[target, timed], help='Notes after an interview')
    p_post.add_argument('interview', help='Name or stage of the interview')
    p_post.add_argument('notes', help='How it went')
    p_post.add_argument('--held-on', help='When the interview took place (default: --when)')
    p_post.set_defaults(func=cmd_mutate, build=build_post_interview)

    # leads todo
    p_todo = subparsers.add_parser('todo', help='Things you owe')
    todo_sub = p_todo.add_subparsers(dest='todo_cmd', required=True)

    p_todo_add = todo_sub.add_parser('add', parents=[target, timed], help='Add a todo')
    p_todo_add.add_argument('action', help='What to do')
    p_todo_add.add_argument('--deadline', '-d', required=True, help='Deadline, e.g. +7d or 2026-11-01')
    p_todo_add.set_defaults(func=cmd_mutate, build=build_todo_add)

    p_todo_done = todo_sub.add_parser('done', parents=[target, timed], help='Complete a todo')
    p_todo_done.add_argument('task', type=int, help='Todo index as shown by "leads show"')
    p_todo_done.set_defaults(func=cmd_mutate, build=build_todo_done)

    # leads wait
    p_wait = subparsers.add_parser('wait', help='Things the company owes you')
    wait_sub = p_wait.add_subparsers(dest='wait_cmd', required=True)

    p_wait_add = wait_sub.add_parser('add', parents=[target, timed], help='Start waiting on something')
    p_wait_add.add_argument('action', help='What you are waiting for')
    p_wait_add.add_argument('--expected', '-e', help='When it is expected')
    p_wait_add.set_defaults(func=cmd_mutate, build=build_wait_add)

    p_wait_done = wait_sub.add_parser('done', parents=[target, timed], help='Mark something as received')
    p_wait_done.add_argument('task', type=int, help='Wait index as shown by "leads show"')
    p_wait_done.set_defaults(func=cmd_mutate, build=build_wait_done)

    # leads list
    p_list = subparsers.add_parser('list', help='List open leads')
    p_list.set_defaults(func=cmd_list)

    # leads show
    p_show = subparsers.add_parser('show', parents=[target], help='Show one lead')
    p_show.set_defaults(func=cmd_show)

    # leads archive
    p_archive = subparsers.add_parser('archive', help='List closed leads')
    p_archive.add_argument('company', nargs='?', help='Only this company')
    p_archive.set_defaults(func=cmd_archive)

    return parser


def main(argv=None):
    started_at = utc_now()
    parser = build_parser()
    args = parser.parse_args(argv)
    args.started_at = started_at
    setup_logging(args.verbose)

    try:
        config = load_config(args.data, args.archive)
        return args.func(args, config)
    except LeadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
