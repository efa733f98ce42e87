#!/usr/bin/env python3
"""
Tests for programmable transaction building
"""

import pytest

from deployer.errors import InvalidArgument
from deployer.transactions import (
    Input, MoveCall, ObjectInput, Publish, PureInput, Result, TransactionBuilder,
    TransferObjects, check_pure, object_key,
)


class TestTransactionBuilder:
    """Test append-only building and dependency ordering"""

    def setup_method(self):
        """Set up a fresh builder"""
        self.txb = TransactionBuilder()

    def test_publish_and_transfer(self):
        """Test the publish shape: publish then transfer its result"""
        cap = self.txb.publish([b"\x01\x02\x03"], ["0x1", "0x2"])
        recipient = self.txb.pure("0xa", "address")
        self.txb.transfer_objects([cap], recipient)
        spec = self.txb.build()

        assert cap == Result(0)
        assert spec.commands[0] == Publish((b"\x01\x02\x03",), ("0x1", "0x2"))
        assert spec.commands[1] == TransferObjects((Result(0),), Input(0))
        assert spec.inputs == (PureInput("0xa", "address"),)

    def test_transfer_accepts_address_string(self):
        cap = self.txb.publish([b"\x00"], [])
        self.txb.transfer_objects([cap], "0xa")
        spec = self.txb.build()
        assert spec.inputs == (PureInput("0xa", "address"),)

    def test_result_before_production(self):
        """Test a result cannot be consumed before its command exists"""
        with pytest.raises(InvalidArgument):
            self.txb.transfer_objects([Result(0)], "0xa")
        assert self.txb.build().inputs == ()

    def test_result_of_later_command(self):
        self.txb.publish([b"\x00"], [])
        with pytest.raises(InvalidArgument):
            self.txb.move_call("0x2::m::f", [Result(1)])

    def test_unknown_input(self):
        with pytest.raises(InvalidArgument):
            self.txb.move_call("0x2::m::f", [Input(3)])

    def test_raw_values_are_not_arguments(self):
        """Test literals must go through pure()"""
        with pytest.raises(InvalidArgument):
            self.txb.move_call("0x2::m::f", [100])

    def test_invalid_target(self):
        with pytest.raises(InvalidArgument):
            self.txb.move_call("0x2::m", [])
        with pytest.raises(InvalidArgument):
            self.txb.move_call("0x2::::f", [])

    def test_object_inputs_are_deduplicated(self):
        first = self.txb.object("0xabc")
        second = self.txb.object("0xabc")
        third = self.txb.object("0xdef")
        assert first == second == Input(0)
        assert third == Input(1)
        assert self.txb.build().object_ids() == ["0xabc", "0xdef"]

    def test_object_dedup_ignores_address_spelling(self):
        """Test padded, unpadded and upper-case ids of one object share an input"""
        first = self.txb.object("0xa")
        assert self.txb.object("0x0a") == first
        assert self.txb.object("0x" + "0" * 63 + "A") == first
        assert self.txb.build().inputs == (ObjectInput("0xa"),)

    def test_empty_object_id(self):
        with pytest.raises(InvalidArgument):
            self.txb.object("")

    def test_publish_requires_modules(self):
        with pytest.raises(InvalidArgument):
            self.txb.publish([], [])

    def test_move_call(self):
        """Test target parsing and argument capture"""
        obj = self.txb.object("0xabc")
        amount = self.txb.pure(5, "u64")
        result = self.txb.move_call("0x2::coin::split", [obj, amount], ["0x2::sui::SUI"])
        call = self.txb.build().commands[0]
        assert result == Result(0)
        assert isinstance(call, MoveCall)
        assert call.target == "0x2::coin::split"
        assert call.arguments == (Input(0), Input(1))
        assert call.type_arguments == ("0x2::sui::SUI",)

    def test_spec_is_a_snapshot(self):
        """Test later appends do not change an already built transaction"""
        self.txb.publish([b"\x00"], [])
        spec = self.txb.build()
        self.txb.publish([b"\x01"], [])
        assert len(spec.commands) == 1


class TestPureValues:
    """Test literal validation against Move types"""

    def test_vectors_are_frozen(self):
        assert check_pure(["a", "b"], "vector<string>") == ("a", "b")
        assert check_pure([[1], [2, 3]], "vector<vector<u8>>") == ((1,), (2, 3))

    @pytest.mark.parametrize("value,type_tag", [
        (-1, "u64"),
        (2 ** 64, "u64"),
        (256, "u8"),
        (True, "u64"),
        ("100", "u64"),
        (1, "bool"),
        ("", "address"),
        ("abc", "vector<string>"),
        ([1], "vector<string>"),
        (1, "0x2::sui::SUI"),
    ])
    def test_rejected(self, value, type_tag):
        with pytest.raises(InvalidArgument):
            check_pure(value, type_tag)

    def test_accepted(self):
        assert check_pure(2 ** 64 - 1, "u64") == 2 ** 64 - 1
        assert check_pure(False, "bool") is False
        assert check_pure("0x2::sui::SUI", "string") == "0x2::sui::SUI"


def test_object_key():
    assert object_key("0x000A") == object_key("0xa") == "a"
    assert object_key("0x0") == "0"
