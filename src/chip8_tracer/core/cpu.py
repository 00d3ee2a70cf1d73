# chip8_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import copy
from abc import ABC, abstractmethod
from typing import Optional, List, Dict

from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.errors import ExecutionError
from chip8_tracer.core.snapshot import Snapshot, Operation, Metadata
from chip8_tracer.core.state import CpuState
from chip8_tracer.common.types import RegisterLayoutInfo

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._state

    # @intent:responsibility これまでに実行した命令数を返します。
    def get_instruction_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility メモリから次の命令語をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCから命令語をフェッチし、その値を返します。
        PCの更新は行いません（_update_pcの責務です）。
        """
        pass

    # @intent:responsibility フェッチした命令語を解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （ログクリア→サスペンド判定→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUとバスの状態を含むSnapshotオブジェクトを返します。
        実行中にExecutionErrorが発生した場合、PCを命令の先頭アドレスに戻してから再送出します。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        # 2. サスペンド判定 (Hook)
        suspended_snapshot = self._handle_suspended(initial_pc)
        if suspended_snapshot:
            return suspended_snapshot

        # 3. フェッチ
        opcode = self._fetch()

        # 4. デコード
        operation = self._decode(opcode)

        # 5. PC更新 (Hook)
        self._update_pc(operation)

        # 6. 実行
        try:
            self._execute(operation)
        except ExecutionError:
            # @intent:rationale 命令ハンドラは検証を変更より先に行うため、巻き戻しはPCのみで足ります。
            self._state.pc = initial_pc
            self._bus.get_and_clear_activity_log()
            raise

        # 7. 後処理 & Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 命令フェッチを保留している状態（入力待ちなど）の処理を行います。
    # @intent:return 保留中であればその状態のSnapshot、そうでなければNone。
    def _handle_suspended(self, current_pc: int) -> Optional[Snapshot]:
        return None

    # @intent:responsibility 命令実行前にPCを命令長分進めます。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        self._cycle_count += operation.cycle_count

        symbol_info = f"{operation.mnemonic}"
        if operation.operands:
            symbol_info += " " + ", ".join(operation.operands)

        # @intent:rationale 後続のstepで状態が変化してもSnapshotが影響を受けないよう、stateを複製します。
        return Snapshot(
            state=copy.deepcopy(self._state),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=symbol_info),
            bus_activity=bus_activity
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        pass
