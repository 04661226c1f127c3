"""
Chat Service
Natural-language assistant over the expense data using Gemini function calling.

Two variants exist and one is chosen once at startup by ``create_chat_service``:
the live Gemini assistant, or a deterministic reply explaining that chat is
not configured.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Type
import json

import google.generativeai as genai
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from src.config.settings import DEFAULT_GEMINI_MODEL, Settings, settings
from src.schemas.chat import CreateExpenseArgs, GetExpensesArgs
from src.schemas.expense import CreateExpenseRequest, ExpenseStatusEnum
from src.services.expense_service import ExpenseService, expense_service
from src.services.lookup_service import LookupService, lookup_service
from src.services.user_service import UserService, user_service
from src.utils.exceptions import ToolArgumentError
from src.utils.logger import setup_logger
from src.utils.money import CURRENCY_SYMBOLS, format_currency

logger = setup_logger()

# Roles accepted from the client, mapped to Gemini's content roles
HISTORY_ROLES = {"user": "user", "assistant": "model"}


class ChatTool(str, Enum):
    """Functions the model may call"""
    GET_EXPENSES = "get_expenses"
    CREATE_EXPENSE = "create_expense"
    GET_USERS = "get_users"
    GET_CATEGORIES = "get_categories"

    @classmethod
    def parse(cls, name: str) -> Optional["ChatTool"]:
        try:
            return cls(name)
        except ValueError:
            return None


def _schema(type_, description: str):
    return genai.protos.Schema(type=type_, description=description)


def build_tool_declarations(currency: str = "GBP") -> genai.protos.Tool:
    """Function declarations offered to the model"""
    T = genai.protos.Type
    get_expenses = genai.protos.FunctionDeclaration(
        name=ChatTool.GET_EXPENSES.value,
        description=(
            "Retrieves expense records from the database with optional filtering "
            "by user ID, status ID, or date range"
        ),
        parameters=genai.protos.Schema(
            type=T.OBJECT,
            properties={
                "userId": _schema(T.INTEGER, "Optional user ID to filter expenses"),
                "statusId": _schema(T.INTEGER, f"Optional status ID ({ExpenseStatusEnum.describe()})"),
                "fromDate": _schema(T.STRING, "Optional start date in ISO format (yyyy-MM-dd)"),
                "toDate": _schema(T.STRING, "Optional end date in ISO format (yyyy-MM-dd)"),
            },
        ),
    )
    create_expense = genai.protos.FunctionDeclaration(
        name=ChatTool.CREATE_EXPENSE.value,
        description="Creates a new expense record in the database",
        parameters=genai.protos.Schema(
            type=T.OBJECT,
            properties={
                "userId": _schema(T.INTEGER, "User ID who owns this expense"),
                "categoryId": _schema(T.INTEGER, "Category ID (use get_categories to look them up)"),
                "amount": _schema(T.NUMBER, f"Expense amount in {currency}"),
                "expenseDate": _schema(T.STRING, "Date of expense in ISO format (yyyy-MM-dd)"),
                "description": _schema(T.STRING, "Optional description of the expense"),
            },
            required=["userId", "categoryId", "amount", "expenseDate"],
        ),
    )
    get_users = genai.protos.FunctionDeclaration(
        name=ChatTool.GET_USERS.value,
        description="Retrieves the list of users in the system",
    )
    get_categories = genai.protos.FunctionDeclaration(
        name=ChatTool.GET_CATEGORIES.value,
        description="Retrieves the list of available expense categories",
    )
    return genai.protos.Tool(
        function_declarations=[get_expenses, create_expense, get_users, get_categories]
    )


def build_system_prompt(currency: str = "GBP") -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, currency + " ")
    return f"""You are an AI assistant for an Expense Management System. You have access to real functions that can:

1. **get_expenses** - Retrieve expense records with optional filters
2. **create_expense** - Create new expense records
3. **get_users** - Get list of users in the system
4. **get_categories** - Get available expense categories

Expense status IDs: {ExpenseStatusEnum.describe()}.

When users ask about expenses, users, or want to create expenses, use these functions to provide accurate, real-time data.

When displaying lists:
- Format numbers as currency ({symbol}X.XX)
- Use clear, readable formatting with bullet points or numbered lists
- Bold important information using **text**
- Keep responses concise but informative

Always be helpful, professional, and accurate with financial data."""


class ChatService(ABC):
    """Turns a user message plus history into an assistant reply"""

    @abstractmethod
    async def get_response(
        self,
        message: str,
        conversation_history: Optional[List[Dict[str, Any]]] = None
    ) -> str:
        ...


class UnconfiguredChatService(ChatService):
    """Fixed reply used when no Gemini key/model is configured"""

    async def get_response(self, message, conversation_history=None) -> str:
        return (
            "👋 **AI Chat Not Configured**\n\n"
            "The chat assistant requires a Google Gemini API key and model.\n\n"
            "**To enable chat functionality:**\n\n"
            "1. Set `GEMINI_API_KEY` in the environment or `.env` file\n"
            f"2. Optionally set `GEMINI_MODEL` (defaults to `{DEFAULT_GEMINI_MODEL}`)\n"
            "3. Restart the application\n\n"
            "**What you can do now:**\n\n"
            "- ✅ View and manage expenses\n"
            "- ✅ Create and edit users\n"
            "- ✅ Use the REST APIs (see /api/docs)\n\n"
            "Once configured, you'll be able to:\n"
            "- 💬 Chat with an AI assistant about your expenses\n"
            "- 📊 Get insights and summaries\n"
            "- 🔍 Query data using natural language\n\n"
            f"**Your message was:** {message}"
        )


class GeminiChatService(ChatService):
    """Gemini-backed assistant with one round of function calling"""

    def __init__(
        self,
        model_name: str,
        expense_service: ExpenseService = expense_service,
        user_service: UserService = user_service,
        lookup_service: LookupService = lookup_service,
        max_output_tokens: int = 1500,
        temperature: float = 0.7,
        currency: str = "GBP"
    ):
        self.expense_service = expense_service
        self.user_service = user_service
        self.lookup_service = lookup_service
        self.currency = currency
        self.model = genai.GenerativeModel(
            model_name,
            system_instruction=build_system_prompt(currency),
            tools=[build_tool_declarations(currency)],
            generation_config=genai.GenerationConfig(
                max_output_tokens=max_output_tokens,
                temperature=temperature,
            ),
        )
        self._tool_handlers = {
            ChatTool.GET_EXPENSES: self._get_expenses,
            ChatTool.CREATE_EXPENSE: self._create_expense,
            ChatTool.GET_USERS: self._get_users,
            ChatTool.GET_CATEGORIES: self._get_categories,
        }

    async def get_response(self, message, conversation_history=None) -> str:
        """
        Answer a user message

        Args:
            message: New user utterance
            conversation_history: Prior turns as {"role", "content"} dicts

        Returns:
            str: Assistant reply, or a warning-prefixed error text
        """
        try:
            contents = self._compose_messages(message, conversation_history or [])

            response = await self.model.generate_content_async(contents)
            function_calls = self._function_calls(response)

            if not function_calls:
                return self._response_text(response)

            # Model's tool-call turn, then one reply part per call
            contents.append(response.candidates[0].content)
            reply_parts = []
            for call in function_calls:
                result = await self._execute_tool(call.name, call.args)
                reply_parts.append(
                    genai.protos.Part(
                        function_response=genai.protos.FunctionResponse(
                            name=call.name,
                            response={"result": result},
                        )
                    )
                )
            contents.append(genai.protos.Content(role="user", parts=reply_parts))

            final_response = await self.model.generate_content_async(
                contents,
                tool_config={"function_calling_config": {"mode": "NONE"}},
            )
            return self._response_text(final_response)

        except Exception as e:
            logger.exception("Error getting chat response")
            return f"⚠️ Error: {str(e)}"

    def _compose_messages(self, message: str, conversation_history: List[Dict[str, Any]]) -> list:
        """History turns tagged user/assistant, then the new message"""
        contents = []
        for turn in conversation_history:
            turn = turn or {}
            role = HISTORY_ROLES.get(turn.get("role"))
            content = turn.get("content")
            # Gemini rejects empty text parts
            if role is None or not content:
                continue
            contents.append({"role": role, "parts": [content]})
        contents.append({"role": "user", "parts": [message]})
        return contents

    @staticmethod
    def _function_calls(response) -> list:
        if not response.candidates:
            return []
        calls = []
        for part in response.candidates[0].content.parts:
            call = getattr(part, "function_call", None)
            if call and call.name:
                calls.append(call)
        return calls

    @staticmethod
    def _response_text(response) -> str:
        if not response.candidates:
            raise ValueError("The model returned no candidates")
        return "".join(
            part.text
            for part in response.candidates[0].content.parts
            if getattr(part, "text", None)
        )

    # ------------------------------------------------------------------
    # Tool execution
    # ------------------------------------------------------------------

    async def _execute_tool(self, name: str, raw_args) -> str:
        """Run one tool call; failures become an error payload for the model"""
        logger.info(f"Executing function: {name} with args: {raw_args}")

        tool = ChatTool.parse(name)
        if tool is None:
            return json.dumps({"error": f"Unknown function: {name}"})

        try:
            payload = await self._tool_handlers[tool](raw_args)
        except ToolArgumentError as e:
            logger.warning(str(e))
            return json.dumps({"error": str(e)})
        except Exception as e:
            logger.exception(f"Error executing function {name}")
            return json.dumps({"error": str(e)})

        return json.dumps(payload, default=str)

    @staticmethod
    def _decode_args(tool: ChatTool, model: Type[BaseModel], raw_args):
        if raw_args is None:
            raw_args = {}
        elif isinstance(raw_args, str):
            try:
                raw_args = json.loads(raw_args or "{}")
            except json.JSONDecodeError as e:
                raise ToolArgumentError(tool.value, f"malformed JSON ({e.msg})")
        try:
            return model.model_validate(dict(raw_args))
        except (ValidationError, TypeError, ValueError) as e:
            raise ToolArgumentError(tool.value, str(e))

    async def _get_expenses(self, raw_args) -> dict:
        args = self._decode_args(ChatTool.GET_EXPENSES, GetExpensesArgs, raw_args)
        expenses = await run_in_threadpool(
            self.expense_service.list_expenses,
            args.user_id, args.status_id, args.from_date, args.to_date
        )
        return {
            "count": len(expenses),
            "expenses": [
                {
                    "expenseId": e.expense_id,
                    "userName": e.user_name,
                    "categoryName": e.category_name,
                    "statusName": e.status_name,
                    "amount": format_currency(e.amount_minor, e.currency),
                    "expenseDate": e.expense_date.isoformat(),
                    "description": e.description,
                }
                for e in expenses
            ],
        }

    async def _create_expense(self, raw_args) -> dict:
        args = self._decode_args(ChatTool.CREATE_EXPENSE, CreateExpenseArgs, raw_args)
        request = CreateExpenseRequest(
            user_id=args.user_id,
            category_id=args.category_id,
            amount=args.amount,
            currency=self.currency,
            expense_date=args.expense_date,
            description=args.description,
        )
        expense_id = await run_in_threadpool(self.expense_service.create_expense, request)
        return {
            "success": True,
            "expenseId": expense_id,
            "message": "Expense created successfully",
        }

    async def _get_users(self, raw_args) -> dict:
        users = await run_in_threadpool(self.user_service.list_users)
        return {
            "count": len(users),
            "users": [
                {
                    "userId": u.user_id,
                    "userName": u.user_name,
                    "email": u.email,
                    "roleName": u.role_name,
                }
                for u in users
            ],
        }

    async def _get_categories(self, raw_args) -> dict:
        categories = await run_in_threadpool(self.lookup_service.list_categories)
        return {
            "count": len(categories),
            "categories": [
                {"categoryId": c.category_id, "categoryName": c.category_name}
                for c in categories
            ],
        }


def create_chat_service(
    app_settings: Settings = settings,
    expense_service: ExpenseService = expense_service,
    user_service: UserService = user_service,
    lookup_service: LookupService = lookup_service
) -> ChatService:
    """Pick the chat variant once, at startup"""
    if not app_settings.chat_configured:
        logger.warning("Gemini configuration is missing; chat assistant disabled")
        return UnconfiguredChatService()

    genai.configure(api_key=app_settings.GEMINI_API_KEY)
    logger.info(f"Gemini chat assistant initialized with model {app_settings.GEMINI_MODEL}")
    return GeminiChatService(
        app_settings.GEMINI_MODEL,
        expense_service=expense_service,
        user_service=user_service,
        lookup_service=lookup_service,
        max_output_tokens=app_settings.CHAT_MAX_OUTPUT_TOKENS,
        temperature=app_settings.CHAT_TEMPERATURE,
        currency=app_settings.DEFAULT_CURRENCY,
    )
