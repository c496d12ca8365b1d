"""Tests for the asynchronous Outcome siblings."""

import asyncio

import pytest

from src.outcome import (
    Err,
    FailurePayloadError,
    NotDefinedError,
    Ok,
    Outcome,
    PredicateError,
)


async def double(x: int) -> int:
    return 2 * x


async def explode(_: object = None) -> int:
    raise RuntimeError("boom")


async def nothing(_: object) -> None:
    return None


class TestOfAsync:
    @pytest.mark.asyncio
    async def test_captures_value(self) -> None:
        async def compute() -> int:
            await asyncio.sleep(0)
            return 7

        assert await Outcome.of_async(compute) == Ok(7)

    @pytest.mark.asyncio
    async def test_captures_exception(self) -> None:
        result = await Outcome.of_async(explode)
        assert result.is_failure()
        with pytest.raises(RuntimeError, match="boom"):
            result.get()

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self) -> None:
        async def cancelled() -> None:
            raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await Outcome.of_async(cancelled)


class TestCollectAsync:
    @pytest.mark.asyncio
    async def test_defined(self) -> None:
        assert await Ok(1).collect_async(double) == Ok(2)

    @pytest.mark.asyncio
    async def test_not_defined(self) -> None:
        result = await Ok(1).collect_async(nothing)
        assert isinstance(result, Err)
        assert isinstance(result.error, NotDefinedError)

    @pytest.mark.asyncio
    async def test_raising(self) -> None:
        assert (await Ok(1).collect_async(explode)).is_failure()

    @pytest.mark.asyncio
    async def test_err_passes_through(self) -> None:
        err = Err(ValueError())
        assert await err.collect_async(double) is err


class TestFilterAsync:
    @pytest.mark.asyncio
    async def test_holds(self) -> None:
        async def positive(x: int) -> bool:
            return x > 0

        ok = Ok(1)
        assert await ok.filter_async(positive) is ok
        result = await Ok(0).filter_async(positive)
        assert isinstance(result, Err)
        assert isinstance(result.error, PredicateError)

    @pytest.mark.asyncio
    async def test_err_passes_through(self) -> None:
        err = Err(ValueError())
        assert await err.filter_async(explode) is err

    @pytest.mark.asyncio
    async def test_raising_predicate(self) -> None:
        result = await Ok(1).filter_async(explode)
        assert isinstance(result, Err)
        assert isinstance(result.error, RuntimeError)


class TestMapAsync:
    @pytest.mark.asyncio
    async def test_map(self) -> None:
        assert await Ok(1).map_async(double) == Ok(2)

    @pytest.mark.asyncio
    async def test_raising(self) -> None:
        assert (await Ok(1).map_async(explode)).is_success() is False

    @pytest.mark.asyncio
    async def test_err_passes_through(self) -> None:
        err = Err(ValueError())
        assert await err.map_async(double) is err
        assert await err.map_async(explode) is err


class TestFlatMapAsync:
    @pytest.mark.asyncio
    async def test_flat_map(self) -> None:
        async def f(x: int) -> Outcome[int]:
            return Ok(x + 1)

        assert await Ok(1).flat_map_async(f) == Ok(2)

    @pytest.mark.asyncio
    async def test_raising(self) -> None:
        assert (await Ok(1).flat_map_async(explode)).is_failure()  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_err_passes_through(self) -> None:
        err = Err(ValueError())
        assert await err.flat_map_async(explode) is err  # type: ignore[arg-type]


class TestIfSuccessOrElseAsync:
    @pytest.mark.asyncio
    async def test_branches(self) -> None:
        counts = {"x": 0, "y": 0}

        async def f(n: int) -> None:
            counts["x"] += n

        async def g() -> None:
            counts["y"] += 1

        await Ok(1).if_success_or_else_async(f, g)
        assert counts == {"x": 1, "y": 0}
        await Err(ValueError()).if_success_or_else_async(f, g)
        assert counts == {"x": 1, "y": 1}
        await Err(ValueError()).if_success_or_else_async(f)
        assert counts == {"x": 1, "y": 1}

    @pytest.mark.asyncio
    async def test_exceptions_propagate(self) -> None:
        async def noop(_: object) -> None:
            return None

        with pytest.raises(RuntimeError, match="boom"):
            await Ok(1).if_success_or_else_async(explode)
        with pytest.raises(RuntimeError, match="boom"):
            await Err(ValueError()).if_success_or_else_async(noop, explode)


class TestOrElseRaiseAsync:
    @pytest.mark.asyncio
    async def test_ok(self) -> None:
        assert await Ok(1).or_else_raise_async() == 1

    @pytest.mark.asyncio
    async def test_raises_stored(self) -> None:
        foo = ValueError("foo")
        with pytest.raises(ValueError) as excinfo:
            await Err(foo).or_else_raise_async()
        assert excinfo.value is foo

    @pytest.mark.asyncio
    async def test_raises_transformed(self) -> None:
        bar = KeyError("bar")

        async def to_bar(_: object) -> KeyError:
            return bar

        with pytest.raises(KeyError) as excinfo:
            await Err(ValueError("foo")).or_else_raise_async(to_bar)
        assert excinfo.value is bar

    @pytest.mark.asyncio
    async def test_wraps_non_exception(self) -> None:
        with pytest.raises(FailurePayloadError):
            await Err("foo").or_else_raise_async()


class TestRecoverAsync:
    @pytest.mark.asyncio
    async def test_ok_passes_through(self) -> None:
        ok = Ok("bar")
        assert await ok.recover_async(explode) is ok

    @pytest.mark.asyncio
    async def test_defined(self) -> None:
        async def message(e: Exception) -> str:
            return str(e)

        assert await Err(ValueError("foo")).recover_async(message) == Ok("foo")

    @pytest.mark.asyncio
    async def test_not_defined(self) -> None:
        assert (await Err(ValueError()).recover_async(nothing)).is_failure()

    @pytest.mark.asyncio
    async def test_raising(self) -> None:
        result = await Err(ValueError("foo")).recover_async(explode)
        assert isinstance(result, Err)
        assert isinstance(result.error, RuntimeError)


class TestRecoverWithAsync:
    @pytest.mark.asyncio
    async def test_defined(self) -> None:
        async def message(e: Exception) -> Outcome[str]:
            return Ok(str(e))

        assert await Err(ValueError("foo")).recover_with_async(message) == Ok("foo")

    @pytest.mark.asyncio
    async def test_not_defined_or_raising(self) -> None:
        err = Err(ValueError("foo"))
        undefined = await err.recover_with_async(nothing)
        assert isinstance(undefined, Err)
        assert isinstance(undefined.error, NotDefinedError)
        assert (await err.recover_with_async(explode)).is_failure()  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_ok_passes_through(self) -> None:
        ok = Ok("bar")
        assert await ok.recover_with_async(explode) is ok  # type: ignore[arg-type]


class TestReduceAndTransformAsync:
    @pytest.mark.asyncio
    async def test_reduce(self) -> None:
        async def f(x: str) -> str:
            return f"{x}-{x}"

        async def g(e: Exception) -> str:
            return str(e)

        assert await Ok("bar").reduce_async(f, g) == "bar-bar"
        assert await Err(ValueError("foo")).reduce_async(f, g) == "foo"

    @pytest.mark.asyncio
    async def test_transform(self) -> None:
        async def f(x: str) -> Outcome[str]:
            return Ok(f"{x}-{x}")

        async def g(e: Exception) -> Outcome[str]:
            return Ok(str(e))

        assert await Ok("bar").transform_async(f, g) == Ok("bar-bar")
        assert await Err(ValueError("foo")).transform_async(f, g) == Ok("foo")

    @pytest.mark.asyncio
    async def test_reduce_exceptions_propagate(self) -> None:
        async def same(x: object) -> object:
            return x

        with pytest.raises(RuntimeError, match="boom"):
            await Ok("a").reduce_async(explode, same)
        with pytest.raises(RuntimeError, match="boom"):
            await Err("b").reduce_async(same, explode)
