import random
import re

from checkout.domain.service.order_number_generator import OrderNumberGenerator


class TestOrderNumberGenerator:

    def test_generate_uses_millisecond_clock(self):
        numbers = OrderNumberGenerator(clock=lambda: 1718000000.5)
        assert numbers.generate() == "ORD1718000000500"

    def test_regenerate_appends_suffix(self):
        numbers = OrderNumberGenerator(clock=lambda: 1718000000.0, rng=random.Random(1))
        assert re.fullmatch(r"ORD1718000000000-\d{1,3}", numbers.regenerate())

    def test_default_generator_format(self):
        assert re.fullmatch(r"ORD\d{13,}", OrderNumberGenerator().generate())
