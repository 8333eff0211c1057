"""Expense routes."""

from fastapi import APIRouter, status

from app.core.deps import CurrentActiveUser, DbSession, Period
from app.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from app.services import expense_service

router = APIRouter()


@router.get("/", response_model=list[ExpenseResponse])
async def list_expenses(
    current_user: CurrentActiveUser,
    db: DbSession,
    period: Period,
) -> list[ExpenseResponse]:
    """
    List the user's expenses of a month (defaults to the current UTC month).

    Raises:
        ValidationError: 400 on a month or year out of range
    """
    month, year = period
    expenses = await expense_service.list_expenses(db, current_user.id, month, year)
    return [expense_service.to_response(expense) for expense in expenses]


@router.post("/", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_in: ExpenseCreate,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> ExpenseResponse:
    """
    Record an expense.

    Raises:
        ValidationError: 400 on an unknown currency or category
    """
    expense = await expense_service.create_expense(db, current_user.id, expense_in)
    return expense_service.to_response(expense)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> ExpenseResponse:
    """
    Get one expense.

    Raises:
        NotFoundError: 404 if the expense is not one of the user's
    """
    expense = await expense_service.get_expense(db, current_user.id, expense_id)
    return expense_service.to_response(expense)


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    expense_in: ExpenseUpdate,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> ExpenseResponse:
    """
    Replace an expense's amount, description, date, category and currency.

    Raises:
        NotFoundError: 404 if the expense is not one of the user's
        ValidationError: 400 on an unknown currency or category
    """
    expense = await expense_service.update_expense(db, current_user.id, expense_id, expense_in)
    return expense_service.to_response(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: int,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> None:
    """
    Delete an expense.

    Raises:
        NotFoundError: 404 if the expense is not one of the user's
    """
    await expense_service.delete_expense(db, current_user.id, expense_id)
