"""
Chat message rendering.

Pure functions from results/reports to Markdown text; nothing here talks to
the network or to Telegram.
"""

import random
from typing import Dict, List, Optional

from telegram.helpers import escape_markdown

from .addresses import to_checksum
from .config import BotConfig
from .models import AllocationFailure, AllocationResult, BatchReport

ZERO_PREVIEW_LIMIT = 10
ERROR_PREVIEW_LIMIT = 5

PHRASES: Dict[str, List[str]] = {
    'checking': [
        '🔍 Digging through the blockchain, hunting for your tokens...',
        '⚡ Casting Linea contract magic spells...',
        '🎯 Targeting your allocation with precision...',
        '🚀 Launching intergalactic scanner...',
        '💎 Searching for your precious tokens...',
        '🔮 Reading the contract crystal ball...',
    ],
    'success': [
        '🎉 Bingo! Found your tokens!',
        "💰 Treasure found! Here's your loot:",
        "🚀 Let's go! Your allocation is ready:",
        "💎 Jackpot! Check what you've got:",
        "🎯 Bulls-eye! Here's your result:",
    ],
    'no_allocation': [
        '😢 Sadly, the contract says you have 0 tokens...',
        '💔 Bad news - allocation is empty',
        '🤷 Contract is silent, seems like nothing there',
        "😔 Empty... but don't give up!",
    ],
    'batch_start': [
        '🚀 Launching mass check! Prepare for data fireworks!',
        '⚡ Checking a whole army of wallets!',
        '🎯 Scanning your list like Terminator!',
        '🔥 Batch mode activated! Hold tight!',
    ],
    'errors': [
        '🤖 Oops! Something went wrong in the matrix...',
        '💥 Houston, we have problems!',
        '⚠️ System glitch! Try again',
    ],
}

FALLBACK_PHRASE = '🤖 Something is happening...'


def get_random_phrase(category: str, rng: Optional[random.Random] = None) -> str:
    choices = PHRASES.get(category) or [FALLBACK_PHRASE]
    return (rng or random).choice(choices)


def short_address(address: str) -> str:
    return f"{address[:8]}..."


def _md(text: str) -> str:
    return escape_markdown(str(text), version=1)


def render_welcome(config: BotConfig) -> str:
    return f"""
🤖 **Hello! I'm the Linea Allocation Bot!**

I check token allocations on {config.network_name} straight from the contract.

**🚀 What I can do:**
• 💎 Check allocation for one wallet
• ⚡ Check up to {config.max_batch_size} wallets at once
• 🔗 Provide direct explorer links
• 🔮 Understand any list format

**🎯 How to use:**
📱 Single wallet: just send the address
📃 Multiple wallets: send a list (any format)

**Commands:**
/help - Help
/check <address> - Check specific address
/health - RPC status
"""


def render_help(config: BotConfig) -> str:
    return f"""
📖 **Help - Linea Allocation Bot**

**🔍 How it works:**
• I call the calculateAllocation function of the allocation contract
• Contract: `{config.contract_address}`
• Network: {config.network_name}
• Result is divided by 10^{config.token_decimals} and truncated to show your allocation
• I provide an explorer link for each wallet

**💰 Usage:**
• Send any address to check
• Or use `/check <address>` command
• Address format: 0x + 40 hex characters
• Up to {config.max_batch_size} addresses at once
"""


def render_invalid_address(address: str) -> str:
    return f"""
❌ **Invalid address!**

{_md(address)} is not a valid address.
Address must be in format: 0x + 40 hex characters (mixed case must match the checksum)

**Example:** `0x1234567890123456789012345678901234567890`
"""


def render_no_addresses() -> str:
    return """
❌ **No valid addresses found!**

Make sure addresses are in format: 0x + 40 hex characters

**Examples of valid addresses:**
`0x1234567890123456789012345678901234567890`
`0xabcdefabcdefabcdefabcdefabcdefabcdefabcd`
"""


def render_too_many(count: int, limit: int) -> str:
    return f"""
⚠️ **Too many addresses!**

Maximum {limit} addresses at once. You have {count}.
Split your list into parts or send the first {limit}.
"""


def render_batch_start(count: int) -> str:
    return f"{get_random_phrase('batch_start')}\n\n🎯 **Checking {count} wallets...**"


def render_single_result(address: str, result: AllocationResult, config: BotConfig) -> str:
    url = config.explorer_address_url(address)
    address = to_checksum(address)

    if isinstance(result, AllocationFailure):
        return f"""
{get_random_phrase('errors')}

**Address:** `{address}`
**Error:** {_md(result.reason)}

Possible reasons:
• Network issues
• RPC overload
• Contract temporarily unavailable

🔄 Try again in a minute!
"""

    if result.is_zero:
        return f"""
{get_random_phrase('no_allocation')}

**Address:** `{address}`
**Allocation:** **0** tokens

🔗 **Explorer:** [View wallet]({url})
"""

    return f"""
{get_random_phrase('success')}

**Address:** `{address}`
**Your allocation:** **{result.display}** tokens 🎉

**Details:**
• Raw value: `{result.raw}`
• Processed allocation: `{result.display}`
• Contract: `{config.contract_address}`

🔗 **Explorer:** [View wallet]({url})
"""


def render_batch_report(report: BatchReport, config: BotConfig) -> str:
    lines = [
        "🎊 **Batch check completed!**",
        "",
        "📊 **Statistics:**",
        f"• Total submitted: {report.total}",
        f"• Unique addresses: {report.unique}",
        f"• Duplicates skipped: {report.duplicates}",
        f"• Found with allocation: {report.found}",
        f"• Total allocation: {report.total_allocation} tokens",
    ]

    if report.nonzero:
        lines += ["", "💰 **Found allocations:**"]
        for entry in report.nonzero:
            lines.append(f"{entry.position + 1}. [{short_address(entry.address)}]"
                         f"({config.explorer_address_url(entry.address)}) → **{entry.result.display}** tokens")

    zero = report.zero
    if zero:
        lines += ["", f"😔 **Zero allocations (first {ZERO_PREVIEW_LIMIT}):**"]
        for i, entry in enumerate(zero[:ZERO_PREVIEW_LIMIT], 1):
            lines.append(f"{i}. [{short_address(entry.address)}]({config.explorer_address_url(entry.address)}) → 0")
        if len(zero) > ZERO_PREVIEW_LIMIT:
            lines.append(f"... and {len(zero) - ZERO_PREVIEW_LIMIT} more addresses with zero allocation")

    failures = report.failures
    if failures:
        lines += ["", f"❌ **Errors ({len(failures)}):**"]
        for i, entry in enumerate(failures[:ERROR_PREVIEW_LIMIT], 1):
            lines.append(f"{i}. `{to_checksum(entry.address)}` - {_md(entry.result.reason)}")
        if len(failures) > ERROR_PREVIEW_LIMIT:
            lines.append(f"... and {len(failures) - ERROR_PREVIEW_LIMIT} more errors")

    if report.duplicates:
        lines += ["", f"♻️ **Duplicates ({report.duplicates}):** "
                  + ", ".join(f"#{e.position + 1}" for e in report.duplicate_entries)]

    lines += ["", "🔥 **Check completed! Good luck with your tokens!**"]
    return "\n".join(lines)


def render_health(block_number: Optional[int], latency: float, config: BotConfig,
                  error: Optional[str] = None) -> str:
    host = config.rpc_url.split('//')[-1].split('/')[0]
    if error is not None:
        return (f"🏥 **RPC Status**\n\n❌ {_md(host)}: {_md(error)} ({latency:.2f}s)\n"
                f"Contract: `{config.contract_address}`")
    return (f"🏥 **RPC Status**\n\n✅ {_md(host)}: block {block_number} ({latency:.2f}s)\n"
            f"Contract: `{config.contract_address}`")


def render_unexpected_error(error: Exception) -> str:
    return f"""
{get_random_phrase('errors')}

An unexpected error occurred. Try again!

**Error:** {_md(str(error) or type(error).__name__)}
"""
