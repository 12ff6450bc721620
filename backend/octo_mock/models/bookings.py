from sqlalchemy import Boolean, Column, Index, Integer, Text, text

from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        Index('ix_bookings_reseller_reference', 'reseller_reference'),
        Index('ix_bookings_supplier_reference', 'supplier_reference'),
    )

    uuid = Column(Text, primary_key=True)
    seq = Column(Integer, nullable=False)  # creation order
    test_mode = Column(Boolean, nullable=False, server_default=text('0'))
    reseller_reference = Column(Text)
    supplier_reference = Column(Text, nullable=False, unique=True)
    status = Column(Text, nullable=False, server_default=text("'CONFIRMED'"))

    product_id = Column(Text, nullable=False)
    option_id = Column(Text, nullable=False)
    availability_id = Column(Text, nullable=False)
    local_date_time_start = Column(Text, nullable=False)
    local_date_time_end = Column(Text, nullable=False)
    all_day = Column(Boolean, nullable=False, server_default=text('0'))
    units_booked = Column(Integer, nullable=False)

    unit_items = Column(Text, nullable=False)  # JSON list
    contact = Column(Text)  # JSON object
    notes = Column(Text)
    pricing = Column(Text)  # JSON object
    delivery_methods = Column(Text, nullable=False)  # JSON list

    utc_created_at = Column(Text, nullable=False)
    utc_updated_at = Column(Text, nullable=False)
    utc_confirmed_at = Column(Text)
    utc_cancelled_at = Column(Text)
    cancel_reason = Column(Text)
