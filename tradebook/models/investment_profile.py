"""
tradebook/models/investment_profile.py

Optional risk/goal questionnaire attached 1:1 to a User.
"""

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from tradebook.database import Base
from tradebook.models.user import new_id


class InvestmentProfile(Base):
    __tablename__ = "investment_profiles"

    id = Column(String(36), primary_key=True, default=new_id)

    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    age = Column(Integer, nullable=True)
    max_acceptable_short_term_loss_percentage = Column(Integer, nullable=True)
    expected_annualized_rate_of_return = Column(Integer, nullable=True)
    time_horizon = Column(String(64), nullable=True)
    years_investing = Column(Integer, nullable=True)
    monthly_cash_flow = Column(Numeric(18, 2), nullable=True)
    default_currency = Column(String(10), nullable=True)

    user = relationship("User", back_populates="investment_profile")

    def __repr__(self):
        return f"<InvestmentProfile(user_id={self.user_id}, time_horizon={self.time_horizon})>"
