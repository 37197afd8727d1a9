"""
CLI commands package.
Contains individual command implementations.
"""
from cement_carbon.cli.commands.analyze import analyze_cmd
from cement_carbon.cli.commands.chat_context import chat_context_cmd
from cement_carbon.cli.commands.companies import companies_cmd
from cement_carbon.cli.commands.config import config_cmd
from cement_carbon.cli.commands.peers import peers_cmd
from cement_carbon.cli.commands.scenario import scenario_cmd

__all__ = [
    "analyze_cmd",
    "chat_context_cmd",
    "companies_cmd",
    "config_cmd",
    "peers_cmd",
    "scenario_cmd",
]
