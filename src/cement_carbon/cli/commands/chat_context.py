"""
Chat context command - Show the grounding sent to the chat assistant for a question.
"""
from pathlib import Path

import typer

from cement_carbon.chat.context_builder import build_grounding_appendix, build_system_instruction
from cement_carbon.chat.entity_matcher import select_relevant_companies
from cement_carbon.cli.commands.common import (
    CARBON_PRICE_OPTION,
    DATASET_OPTION,
    console,
    load_app_config,
    load_dataset,
    resolve_carbon_price,
)
from cement_carbon.utils.log_setup import LogPhases, log_context

QUERY_ARGUMENT = typer.Argument(..., help="Question as the user would type it")


def chat_context_cmd(
    ctx: typer.Context,
    query: str = QUERY_ARGUMENT,
    carbon_price: float | None = CARBON_PRICE_OPTION,
    dataset: Path | None = DATASET_OPTION,
):
    """
    Print the system instruction the chat assistant would receive.

    Example:
        cement-carbon chat-context "How exposed is ultratech at $25?"
    """
    config = load_app_config(ctx)
    price = resolve_carbon_price(config, carbon_price)
    companies = load_dataset(config, dataset)

    with log_context(phase=LogPhases.CHAT_CONTEXT, carbon_price=price):
        relevant = select_relevant_companies(query, companies, threshold=config.chat.match_threshold)
        appendix = build_grounding_appendix(
            companies,
            relevant,
            max_chars=config.chat.max_data_chars,
            max_plants=config.chat.max_plants_per_company,
        )
        instruction = build_system_instruction(price, companies, appendix)

    console.print(f"[bold cyan]Matched companies:[/bold cyan] {', '.join(c.name for c in relevant)}\n")
    console.print(instruction, markup=False, highlight=False)
