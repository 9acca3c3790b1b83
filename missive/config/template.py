"""Default configuration template.

This template is written to ~/.config/missive/config.toml
when running `missive config init`.
"""

CONFIG_TEMPLATE = """\
# Missive Configuration

[defaults]
folder = "INBOX"
read_headers = ["From", "To", "Cc", "Subject"]

# Add your accounts below. Each account points at a local Maildir,
# typically kept up to date by mbsync, offlineimap or getmail.
#
# [accounts.personal]
# mail_dir = "~/Mail/Personal"
# default_folder = "INBOX"
# read_headers = ["From", "Subject", "Date"]
#
# Read a message with:
#   missive read --account personal <envelope-id>
"""
