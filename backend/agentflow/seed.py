# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Startup data: example agents and logs, plus the static tool catalog.
"""


def _fn(name, description, parameters, returns="string"):
    return {
        "name": name,
        "description": description,
        "parameters": {param: {"type": "string"} for param in parameters},
        "returns": returns,
    }


TOOL_CATALOG = [
    {
        "name": "webscraper",
        "type": "web",
        "description": "Fetch web pages and extract their content",
        "functions": [
            _fn("fetchPage", "Download a page", ["url"]),
            _fn("extractText", "Extract text matching a CSS selector", ["selector"]),
            _fn("extractLinks", "Extract links matching a CSS selector", ["selector"], returns="array"),
        ],
        "auth": {"type": "none"},
    },
    {
        "name": "chatgpt",
        "type": "llm",
        "description": "OpenAI text generation and analysis",
        "functions": [
            _fn("generateText", "Generate text from a prompt", ["prompt"]),
            _fn("summarizeText", "Summarize a block of text", ["text"]),
            _fn("analyzeText", "Analyze a block of text", ["text"]),
        ],
        "auth": {"type": "api_key", "env": "OPENAI_API_KEY"},
    },
    {
        "name": "anthropic",
        "type": "llm",
        "description": "Anthropic Claude text generation",
        "functions": [
            _fn("generateText", "Generate text from a prompt", ["prompt"]),
            _fn("summarizeText", "Summarize a block of text", ["text"]),
        ],
        "auth": {"type": "api_key", "env": "ANTHROPIC_API_KEY"},
    },
    {
        "name": "gmail",
        "type": "email",
        "description": "Send and read Gmail messages",
        "functions": [
            _fn("sendEmail", "Send an email", ["to", "subject", "body"], returns="object"),
            _fn("readEmails", "Read emails matching a filter", ["filter"], returns="array"),
            _fn("getAttachments", "Fetch attachments of an email", ["emailId"], returns="array"),
        ],
        "auth": {"type": "oauth2", "scopes": ["gmail.send", "gmail.readonly"]},
    },
    {
        "name": "google_calendar",
        "type": "calendar",
        "description": "Create and list Google Calendar events",
        "functions": [
            _fn("createEvent", "Create an event", ["title", "start", "end"], returns="object"),
            _fn("listEvents", "List events in a time range", ["start", "end"], returns="array"),
        ],
        "auth": {"type": "oauth2", "scopes": ["calendar"]},
    },
    {
        "name": "google_sheets",
        "type": "data",
        "description": "Read and write Google Sheets ranges",
        "functions": [
            _fn("readData", "Read a range", ["spreadsheetId", "range"], returns="array"),
            _fn("writeData", "Write a range", ["spreadsheetId", "range", "data"], returns="object"),
        ],
        "auth": {"type": "oauth2", "scopes": ["spreadsheets"]},
    },
    {
        "name": "slack",
        "type": "messaging",
        "description": "Post and read Slack messages",
        "functions": [
            _fn("sendMessage", "Post a message to a channel", ["channel", "text"], returns="object"),
            _fn("readMessages", "Read recent channel messages", ["channel", "count"], returns="array"),
        ],
        "auth": {"type": "oauth2", "scopes": ["chat:write", "channels:history"]},
    },
    {
        "name": "twitter",
        "type": "social",
        "description": "Post and search tweets",
        "functions": [
            _fn("postTweet", "Post a tweet", ["text"], returns="object"),
            _fn("searchTweets", "Search recent tweets", ["query"], returns="array"),
        ],
        "auth": {"type": "oauth2"},
    },
    {
        "name": "database",
        "type": "database",
        "description": "Query and modify a SQL database",
        "functions": [
            _fn("query", "Run a read query", ["sql"], returns="array"),
            _fn("insert", "Insert a row", ["table", "data"], returns="object"),
            _fn("update", "Update rows", ["table", "data", "condition"], returns="object"),
        ],
        "auth": {"type": "connection_string"},
    },
    {
        "name": "file_system",
        "type": "storage",
        "description": "Read and write local files",
        "functions": [
            _fn("readFile", "Read a file", ["path"]),
            _fn("writeFile", "Write a file", ["path", "content"], returns="object"),
            _fn("listFiles", "List a directory", ["directory"], returns="array"),
        ],
        "auth": {"type": "none"},
    },
    {
        "name": "trigger",
        "type": "input",
        "description": "Start a workflow on a schedule or webhook",
        "functions": [
            _fn("schedule", "Run on a cron schedule", ["schedule"], returns="object"),
            _fn("webhook", "Run when a webhook is called", ["path"], returns="object"),
        ],
        "auth": {"type": "none"},
    },
    {
        "name": "input",
        "type": "input",
        "description": "Collect input from the user",
        "functions": [
            _fn("getText", "Ask the user for text", ["prompt"]),
            _fn("getFile", "Ask the user for a file", ["prompt"], returns="object"),
        ],
        "auth": {"type": "none"},
    },
    {
        "name": "text",
        "type": "processing",
        "description": "Plain text transformations",
        "functions": [
            _fn("transform", "Apply a text operation", ["operation"]),
        ],
        "auth": {"type": "none"},
    },
    {
        "name": "output",
        "type": "output",
        "description": "Show results to the user",
        "functions": [
            _fn("displayText", "Display text", ["text"], returns="object"),
        ],
        "auth": {"type": "none"},
    },
]


SEED_AGENTS = [
    {
        "name": "Price Monitor",
        "description": "Monitors Amazon product prices and sends Telegram notifications",
        "prompt": "Monitor a website for price changes and notify me on Telegram.",
        "tools": ["Web Scraper", "Telegram API", "Data Processor"],
        "status": "active",
    },
    {
        "name": "Email Summarizer",
        "description": "Summarizes daily emails and saves them to Notion",
        "prompt": "Summarize my daily emails and store them in Notion.",
        "tools": ["Gmail API", "OpenAI API", "Notion API"],
        "status": "inactive",
    },
]


# (index into SEED_AGENTS, message)
SEED_LOGS = [
    (0, "Starting price check for Amazon products"),
    (0, "Successfully scraped 5 product prices"),
    (0, "Price change detected for Product ID #1242"),
    (0, "Notification sent to Telegram"),
    (1, "Starting email processing"),
    (1, "Retrieved 24 emails from Gmail"),
    (1, "Generated summaries using OpenAI"),
    (1, "Saved summaries to Notion database"),
]
