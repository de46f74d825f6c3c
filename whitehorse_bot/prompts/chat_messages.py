#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Chat message templates for the real estate bot (Telegram Markdown)."""

# Welcome message template
WELCOME_MESSAGE = """🏡 *Whitehorse Real Estate Bot*

Search Domain.com.au & realestate.com.au for current listings.

*Commands:*
`/search [suburb] [beds] bed [baths] bath [cars] car [type]`
`/domain [same format]` — Domain only
`/rea [same format]` — REA only
`/help` — Show examples

*Example:*
/search box hill 3 bed 2 bath 2 car house"""

HELP_MESSAGE = """🔍 *Search Examples*

`/search box hill 3 bed 2 bath house`
`/search nunawading 4 bedroom 2 bathroom 2 car`
`/search blackburn 2 bed unit`
`/search forest hill townhouse`
`/domain mont albert 5 bed house`
`/rea surrey hills 3 bed`

*Suburbs I know:*
Box Hill, Blackburn, Nunawading, Mitcham, Ringwood, Vermont, Forest Hill, Burwood, Mont Albert, Surrey Hills, Heathmont, Croydon + more

*Property types:* house, unit, apartment, townhouse, villa, land, duplex"""

USAGE_MESSAGE = "Tell me what to look for, e.g.\n`/{command} box hill 3 bed 2 bath house`"

NO_SUBURB_MESSAGE = "⚠️ I couldn't detect a suburb. Try:\n`search box hill 3 bed 2 bath house`"

SEARCHING_MESSAGE = "🔍 *Searching for:*\n{summary}\n\n⏳ Fetching listings, give me 30–60 seconds..."

# Search summary lines
SUMMARY_LINES = {
    "suburb": "📍 *Suburb:* {value}",
    "beds": "🛏 *Beds:* {value}+",
    "baths": "🚿 *Baths:* {value}+",
    "cars": "🚗 *Cars:* {value}+",
    "property_type": "🏠 *Type:* {value}",
}

RESULTS_HEADER = "{label} — {count} listings found\n\n"

LISTING_TEMPLATE = "{icon} *{address}*\n💰 {price}\n🛏 {beds} bed  🚿 {baths} bath  🚗 {cars} car  {property_type}\n🔗 {url}"

LISTING_SEPARATOR = "\n\n─────────────────\n\n"

# Per-source error handling
ERROR_PROMPTS = {
    "source_error": "{label}\n❌ Error: {error}\n\nSearch manually: {url}",
    "no_results": "{label}\n😕 No listings found matching your criteria.\n\nTry searching manually: {url}",
}
