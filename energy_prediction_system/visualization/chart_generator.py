"""
차트 및 시각화 생성 모듈
"""
import matplotlib
matplotlib.use('Agg')  # 서버 환경에서 matplotlib 사용을 위한 백엔드 설정
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
from io import BytesIO
from typing import Dict, Sequence

from energy_prediction_system.core.models import BatteryBalanceResult

plt.rcParams['font.family'] = ['DejaVu Sans', 'Malgun Gothic', 'AppleGothic']
plt.rcParams['axes.unicode_minus'] = False

class ChartGenerator:
    """차트 생성 클래스"""

    def __init__(self):
        # 색상 팔레트
        self.colors = {
            'primary': '#2196F3',
            'secondary': '#4CAF50',
            'accent': '#FF9800',
            'warning': '#F44336',
            'success': '#81C784',
            'info': '#81D4FA'
        }

        sns.set_style("whitegrid")

    def _to_png(self, fig) -> BytesIO:
        img_bytes = BytesIO()
        fig.savefig(img_bytes, format='png', dpi=150, bbox_inches='tight')
        img_bytes.seek(0)
        plt.close(fig)
        return img_bytes

    def generate_hourly_chart(self, hourly_breakdown: Sequence[Dict]) -> BytesIO:
        """시간별 발전량/일사량 차트 생성

        Args:
            hourly_breakdown: [{'timestamp', 'kwh', 'radiationWm2'}, ...]
        """
        labels = [str(h.get('timestamp', ''))[-5:] for h in hourly_breakdown]
        energy = [float(h.get('kwh') or 0) for h in hourly_breakdown]
        radiation = [float(h.get('radiationWm2') or 0) for h in hourly_breakdown]
        positions = np.arange(len(energy))

        fig, ax = plt.subplots(figsize=(14, 6))
        ax.bar(positions, energy, color=self.colors['accent'], alpha=0.8, label='발전량 (kWh)')
        ax.set_ylabel('발전량 (kWh)', fontsize=12)
        ax.set_ylim(0, (max(energy, default=0) or 1) * 1.1)

        ax2 = ax.twinx()
        ax2.plot(positions, radiation, color=self.colors['primary'], linewidth=2, label='일사량 (W/m²)')
        ax2.set_ylabel('일사량 (W/m²)', fontsize=12)
        ax2.set_ylim(0, (max(radiation, default=0) or 1) * 1.1)

        step = max(1, len(labels) // 24)
        ax.set_xticks(positions[::step])
        ax.set_xticklabels(labels[::step], rotation=45)
        ax.set_title('시간별 태양광 발전량 예측', fontsize=16, fontweight='bold', pad=20)
        ax.legend(loc='upper left')
        ax2.legend(loc='upper right')

        fig.tight_layout()
        return self._to_png(fig)

    def generate_balance_chart(self, battery: BatteryBalanceResult) -> BytesIO:
        """일 소비량/발전량/저장량 비교 차트 생성"""
        labels = ['소비량', '발전량', '저장 가능량', '권장 용량']
        values = [
            battery.daily_consumption_kwh,
            battery.daily_generation_kwh,
            battery.daily_storable_kwh,
            battery.recommended_capacity_kwh,
        ]
        colors = [self.colors['warning'], self.colors['accent'], self.colors['secondary'], self.colors['info']]

        fig, ax = plt.subplots(figsize=(10, 6))
        bars = ax.bar(labels, values, color=colors, alpha=0.85)

        top = max(values) or 1
        for bar in bars:
            height = bar.get_height()
            ax.text(bar.get_x() + bar.get_width()/2., height + top*0.01,
                    f'{height:.2f}', ha='center', va='bottom', fontsize=10)

        ax.set_title(f'일일 에너지 수지 (자립 {battery.autonomy_days:.1f}일, '
                     f'태양광 커버율 {battery.solar_coverage_percent:.0f}%)',
                     fontsize=14, fontweight='bold')
        ax.set_ylabel('kWh', fontsize=12)
        ax.set_ylim(0, top * 1.15)

        fig.tight_layout()
        return self._to_png(fig)

    def generate_angle_heatmap(
        self,
        factor_matrix: np.ndarray,
        tilt_range: range,
        orientation_range: range
    ) -> BytesIO:
        """경사각/방위각 보정 계수 히트맵 생성"""
        max_idx = np.unravel_index(np.argmax(factor_matrix), factor_matrix.shape)
        best_tilt = list(tilt_range)[max_idx[0]]
        best_orientation = list(orientation_range)[max_idx[1]]

        fig, ax = plt.subplots(figsize=(14, 8))
        sns.heatmap(
            factor_matrix,
            ax=ax,
            cmap='viridis',
            vmin=0.5,
            vmax=1.0,
            xticklabels=list(orientation_range),
            yticklabels=list(tilt_range),
            cbar_kws={'label': '보정 계수'}
        )
        ax.invert_yaxis()

        ax.set_xlabel('방위각 (°, 0=북)', fontsize=12)
        ax.set_ylabel('경사각 (°)', fontsize=12)
        ax.set_title(f'방위각/경사각 조합에 따른 보정 계수\n최적: {best_orientation}°/{best_tilt}°',
                     fontsize=14, fontweight='bold')

        fig.tight_layout()
        return self._to_png(fig)
