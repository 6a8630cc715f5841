"""
CLI Commands

Command implementations for the MailChain CLI.
"""
