import pytest

from flannel.errors import FlannelError
from flannel.interpreter import parse_program, Interpreter


def output_of(source, capsys):
    Interpreter().run(parse_program(source))
    return capsys.readouterr().out.strip().split('\n')


def error_kind(source):
    with pytest.raises(FlannelError) as excinfo:
        Interpreter().run(parse_program(source))
    return excinfo.value.kind


def test_construct_method_receives_new_arguments(capsys):
    source = """
    class Point {
        Int x = 0;
        Int y = 0;
        fn construct(Int a, Int b) -> Und {
            x = a;
            y = b;
        }
    }
    Point p = new Point(3, 4);
    echo p.x + p.y;
    """
    assert output_of(source, capsys) == ['7']


def test_arguments_without_construct_method():
    assert error_kind("class Empty { } Empty e = new Empty(1);") == 'ArgumentMismatch'


def test_unknown_class_in_new():
    assert error_kind("Ghost g = new Ghost();") == 'UnknownType'


def test_instances_do_not_share_property_updates(capsys):
    source = """
    class Counter {
        Int count = 0;
        fn bump() -> Und { count = count + 1; }
    }
    Counter a = new Counter();
    Counter b = new Counter();
    a.bump();
    a.bump();
    b.bump();
    echo a.count;
    echo b.count;
    """
    assert output_of(source, capsys) == ['2', '1']


def test_this_is_the_receiver(capsys):
    source = """
    class Self {
        fn me() -> Self { return this; }
    }
    Self s = new Self();
    Self t = s.me();
    echo t == s;
    echo t == new Self();
    """
    assert output_of(source, capsys) == ['true', 'false']


def test_methods_are_inherited_and_can_be_replaced(capsys):
    source = """
    class Base {
        fn name() -> Str { return 'base'; }
        fn greet() -> Str { return 'hi from base'; }
    }
    class Child extends Base {
        fn name() -> Str { return 'child'; }
    }
    Child c = new Child();
    echo c.name();
    echo c.greet();
    """
    assert output_of(source, capsys) == ['child', 'hi from base']


def test_override_changes_inherited_default(capsys):
    source = """
    class Light { Bln on = false; }
    class Lamp extends Light { override on = true; }
    Lamp l = new Lamp();
    Light k = new Light();
    echo l.on;
    echo k.on;
    """
    assert output_of(source, capsys) == ['true', 'false']


def test_override_of_missing_property():
    assert error_kind("class A { } class B extends A { override z = 1; }") == 'UnknownProperty'


def test_override_with_other_class():
    assert error_kind("class A { Int n = 1; } class B extends A { override n = 'x'; }") == 'TypeMismatch'


def test_property_default_must_match_declared_class():
    assert error_kind("class A { Int n = 'x'; }") == 'TypeMismatch'


def test_extending_builtin_class():
    assert error_kind("class Big extends Int { }") == 'InvalidInheritance'


def test_extending_unknown_class():
    assert error_kind("class Lost extends Nowhere { }") == 'UnknownType'


def test_extending_obj_explicitly(capsys):
    assert output_of("class Plain extends Obj { } Plain p = new Plain(); echo p;", capsys) == ['<Plain object>']


def test_method_receiver_resolved_before_arguments():
    assert error_kind("missing.go(nothing());") == 'UnboundVariable'


def test_method_argument_count():
    source = """
    class Adder {
        fn add(Int a, Int b) -> Int { return a + b; }
    }
    Adder x = new Adder();
    echo x.add(1);
    """
    assert error_kind(source) == 'ArgumentMismatch'


def test_user_operator_methods_drive_expressions(capsys):
    source = """
    class Money {
        Int cents = 0;
        fn construct(Int c) -> Und { cents = c; }
        fn add(Money other) -> Money { return new Money(cents + other.cents); }
        fn getStr() -> Str { return 'cents: ' + cents.getStr(); }
    }
    Money a = new Money(150);
    Money b = new Money(275);
    echo a + b;
    """
    assert output_of(source, capsys) == ['cents: 425']
